import decimal
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_vendors.json"

ROUNDING_MODES = {
    "ROUND_HALF_EVEN": decimal.ROUND_HALF_EVEN,
    "ROUND_HALF_UP": decimal.ROUND_HALF_UP,
    "ROUND_HALF_DOWN": decimal.ROUND_HALF_DOWN,
}


# Carga variables y configuracion que se usa en el .env
class Settings(BaseSettings):
    APP_NAME: str = "Vendor Risk Scoring API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///vendor_risk.db"

    # Scoring
    SCORE_ROUNDING: str = "ROUND_HALF_EVEN"
    ASSESSED_BY: str = "System"

    # Paginacion
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Datos de ejemplo
    SEED_ON_STARTUP: bool = True
    SEED_DATA_PATH: Path = DEFAULT_SEED_PATH

    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("SCORE_ROUNDING")
    @classmethod
    def _check_rounding(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in ROUNDING_MODES:
            raise ValueError(
                f"SCORE_ROUNDING must be one of {sorted(ROUNDING_MODES)}, got {value!r}"
            )
        return value

    @property
    def rounding_mode(self) -> str:
        return ROUNDING_MODES[self.SCORE_ROUNDING]


@lru_cache()
def get_settings():
    return Settings()
