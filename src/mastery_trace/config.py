"""Configuration management for mastery_trace.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from typing import IO

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mastery_trace.bkt.parameters import DEFAULT_PARAMETERS, clamp_parameters
from mastery_trace.logging import configure_logging, resolve_level
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "BKTDefaultSettings",
    "LogSettings",
    "MasteryTraceConfig",
]


class BKTDefaultSettings(BaseSettings):
    """Default parameters used for skills without tuned parameters.

    Values are clamped when converted, so out-of-range environment
    values never reach the model.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASTERY_TRACE_BKT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    p_init: float = DEFAULT_PARAMETERS.p_init
    p_transit: float = DEFAULT_PARAMETERS.p_transit
    slip: float = DEFAULT_PARAMETERS.slip
    guess: float = DEFAULT_PARAMETERS.guess
    forget: float | None = DEFAULT_PARAMETERS.forget  # unset or 0 disables decay

    def to_parameters(self) -> ParameterSet:
        """Build the clamped default ParameterSet."""
        return clamp_parameters(
            {
                "p_init": self.p_init,
                "p_transit": self.p_transit,
                "slip": self.slip,
                "guess": self.guess,
                "forget": self.forget,
            }
        )


class LogSettings(BaseSettings):
    """Opt-in log rendering for applications embedding the library.

    Nothing is configured until apply() is called.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASTERY_TRACE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        resolve_level(value)
        return value.strip().upper()

    def apply(self, stream: IO[str] | None = None) -> None:
        """Configure the library's loggers from these settings."""
        configure_logging(self.level, json_output=self.json_output, stream=stream)


class MasteryTraceConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = MasteryTraceConfig()
        defaults = config.bkt.to_parameters()
        config.log.apply()  # optional
    """

    model_config = SettingsConfigDict(
        env_prefix="MASTERY_TRACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    bkt: BKTDefaultSettings = Field(default_factory=BKTDefaultSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    # Scheduling thresholds
    review_threshold: float = Field(default=0.72, gt=0.0, le=1.0)
    mastery_threshold: float = Field(default=0.95, gt=0.0, le=1.0)

    # Item statistics
    stats_window_days: int = Field(default=7, ge=1)
