"""Game configuration and runtime settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WINNING_SCORE = 121

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class GameConfig(BaseModel):
    target_score: int = Field(WINNING_SCORE, ge=1, le=WINNING_SCORE, description="Score that ends the game.")
    seed: Optional[int] = Field(None, description="Seed for shuffling and the first-dealer draw.")
    first_dealer: Optional[int] = Field(None, description="Seat index of the first dealer; random when unset.")
    show_delay: float = Field(0.0, ge=0.0, description="Pause in seconds between show announcements.")

    @field_validator("first_dealer")
    @classmethod
    def validate_first_dealer(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value not in (0, 1):
            raise ValueError("first_dealer must be 0 or 1.")
        return value


class Settings(BaseSettings):
    """Runtime settings loaded from ``CRIBBAGE_*`` environment variables."""

    log_level: str = "INFO"
    # Unset lets each entry point pick its own pace.
    ai_delay: Optional[float] = Field(None, ge=0.0)

    model_config = SettingsConfigDict(env_prefix="CRIBBAGE_", env_file=".env", extra="ignore")

    def think_delay(self, default: float = 0.0) -> float:
        return default if self.ai_delay is None else self.ai_delay

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=level or get_settings().log_level, format=LOG_FORMAT)
