from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        case_sensitive=True,
    )

    API_V1_STR: str = "/api/v1"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'nanny_booking.db'}"

    # CORS origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    CORS_ALLOW_ALL: bool = False

    # Default currency code stamped on revenue records
    DEFAULT_CURRENCY: str = "ZAR"

    # Authoritative hourly pricing function. Leave empty to price hourly
    # bookings locally (results are flagged as estimated).
    HOURLY_PRICING_URL: str = ""
    HOURLY_PRICING_TIMEOUT: float = 5.0
    HOURLY_PRICING_API_KEY: str = ""

    # Offset used to read the calendar date out of client timestamps
    # (browsers send local midnight as UTC, e.g. "2025-11-17T22:00:00.000Z").
    PRICING_UTC_OFFSET_HOURS: float = 2.0

    LOG_LEVEL: str = "INFO"

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("HOURLY_PRICING_URL", "HOURLY_PRICING_API_KEY", "DEFAULT_CURRENCY", mode="before")
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("HOURLY_PRICING_TIMEOUT")
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HOURLY_PRICING_TIMEOUT must be positive")
        return v

    @field_validator("PRICING_UTC_OFFSET_HOURS")
    def offset_in_range(cls, v: float) -> float:
        if not -24 < v < 24:
            raise ValueError("PRICING_UTC_OFFSET_HOURS must be between -24 and 24")
        return v

    @model_validator(mode="after")
    def allow_all_if_requested(cls, values: "Settings") -> "Settings":
        if values.CORS_ALLOW_ALL:
            values.CORS_ORIGINS = ["*"]
        return values


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()
