"""
Centralized Configuration for the Volume Calculator
Uses Pydantic Settings with .env loading.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from volumecalc.sizing.rounding import RoundingPolicy


class LoggingSettings(BaseSettings):
    """Logging settings."""
    model_config = SettingsConfigDict(extra="ignore")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Accept text or json, case-insensitively."""
        value = str(v).lower()
        if value not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {v!r}")
        return value


class CalculatorSettings(BaseSettings):
    """Main calculator settings."""
    model_config = SettingsConfigDict(
        env_prefix="VOLUMECALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Persistence
    store_path: Path = Path("~/.volumecalc/store.json")

    # One rounding policy per deployment
    rounding_policy: RoundingPolicy = RoundingPolicy.LOT_FLOORED

    # Form defaults (60 dollars of risk on 6000 capital)
    default_instrument: str = "SPX500"
    capital: Decimal = Decimal("6000")
    risk_percentage: Decimal = Field(default=Decimal("1"), gt=0, le=100)
    stop_loss_points: Decimal = Decimal("12")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("rounding_policy", mode="before")
    @classmethod
    def validate_rounding_policy(cls, v: str) -> RoundingPolicy:
        """Validate and convert rounding policy."""
        if isinstance(v, RoundingPolicy):
            return v
        return RoundingPolicy(str(v).lower().replace("-", "_"))

    @property
    def resolved_store_path(self) -> Path:
        """Store path with ~ expanded."""
        return self.store_path.expanduser()


@lru_cache()
def get_settings() -> CalculatorSettings:
    """Get cached settings instance."""
    return CalculatorSettings()


def reload_settings() -> CalculatorSettings:
    """Force reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
