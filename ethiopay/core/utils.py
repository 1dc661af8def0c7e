import logging
import os
from decimal import Decimal, ROUND_HALF_UP, localcontext
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ethiopay.core.config import settings

_CENT = Decimal("0.01")

def mkdir_safe(path: str):
    Path(path).mkdir(parents=True, exist_ok=True)

def round2(value: float) -> float:
    """Round half-up to two decimals on the printed value, not the binary one."""
    # a finite float has at most 309 integer digits
    with localcontext() as ctx:
        ctx.prec = 400
        return float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))

def setup_logging(name: str = "system", *, log_level: str = None):
    logger_name = f"{settings.APP_NAME}.{name}"
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        return logger
    level = log_level or settings.LOG_LEVEL
    logger.setLevel(getattr(logging, level.upper()))
    mkdir_safe(settings.LOG_DIR)
    logfile = Path(settings.LOG_DIR) / f"{name}.log"
    handler = RotatingFileHandler(str(logfile), maxBytes=10_000_000, backupCount=5)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if os.getenv("DEV", "").lower() in ("1", "true", "yes"):
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)
    logger.propagate = False
    return logger
