import logging
import logging.handlers
from ethiopay.core.utils import setup_logging, round2

def test_setup_logging_idempotent(tmp_path):
    name = "tmptest"
    logger1 = setup_logging(name)
    handlers_before = len(logger1.handlers)
    logger2 = setup_logging(name)
    handlers_after = len(logger2.handlers)
    assert handlers_before == handlers_after
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger2.handlers)

def test_round2_half_up():
    assert round2(1.005) == 1.01
    assert round2(2.675) == 2.68
    assert round2(0.125) == 0.13
    assert round2(41666.666666666664) == 41666.67
    assert round2(-1.005) == -1.01
    assert round2(10) == 10.0

def test_round2_large_values():
    assert round2(9.3e26) == 9.3e26
    assert round2(1.7e308) == 1.7e308
