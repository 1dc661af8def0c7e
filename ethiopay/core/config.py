from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional, Tuple

class Settings(BaseSettings):
    APP_NAME: str = Field("EthioPay", description="Logger namespace and page title")
    LOG_LEVEL: str = Field("INFO", description="Root level for application loggers")
    LOG_DIR: str = Field("./data/logs", description="Directory for rotating log files")

    # Employee pension contribution (Proclamation 715/2011)
    PENSION_RATE: float = 0.07
    DAYS_PER_MONTH: int = 30

    # Income tax (Proclamation 979/2016), monthly ETB
    # (upper bound inclusive, rate, quick deduction)
    TAX_BANDS: List[Tuple[float, float, float]] = [
        (600, 0.0, 0.0),
        (1650, 0.10, 60.0),
        (3200, 0.15, 142.5),
        (5250, 0.20, 302.5),
        (7800, 0.25, 565.0),
        (10900, 0.30, 955.0),
        (float("inf"), 0.35, 1560.0),
    ]

    # Severance (Labour Proclamation 1156/2019)
    SEVERANCE_FIRST_YEAR_DAYS: float = 30.0
    SEVERANCE_ADDITIONAL_YEAR_DAYS: float = 10.0
    SEVERANCE_CAP_DAYS: float = 360.0

    # Optional Q&A assistant, never called by the engine
    ASSISTANT_API_URL: Optional[str] = Field(None, description="Chat endpoint accepting JSON messages")
    ASSISTANT_API_KEY: Optional[str] = Field(None, description="Bearer token for the chat endpoint")
    ASSISTANT_MODEL: str = "gemini-1.5-flash"
    ASSISTANT_TIMEOUT: float = 20.0

settings = Settings()
