"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    SOLVER_LOG_LEVEL: str = "WARNING"

    # Implied volatility solver
    IV_INITIAL_GUESS: float = Field(0.5, gt=0)
    IV_TOLERANCE: float = Field(1e-6, gt=0)
    IV_MAX_ITERATIONS: int = Field(100, ge=1)
    IV_MIN_VOLATILITY: float = Field(1e-4, gt=0)
    IV_MAX_VOLATILITY: float = Field(5.0, gt=0)

    @model_validator(mode="after")
    def check_volatility_bounds(self) -> "Settings":
        if self.IV_MIN_VOLATILITY >= self.IV_MAX_VOLATILITY:
            raise ValueError(
                f"IV_MIN_VOLATILITY ({self.IV_MIN_VOLATILITY}) must be below "
                f"IV_MAX_VOLATILITY ({self.IV_MAX_VOLATILITY})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
