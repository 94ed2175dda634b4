"""Configuration management for kelma.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kelma.models.review import MIN_EASINESS

__all__ = [
    "SchedulerSettings",
    "EvaluationSettings",
    "SpeechSettings",
    "KelmaConfig",
]


class SchedulerSettings(BaseSettings):
    """SM-2 scheduling parameters."""

    model_config = SettingsConfigDict(
        env_prefix="KELMA_SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initial_easiness: float = Field(default=2.5, ge=MIN_EASINESS)
    min_easiness: float = Field(default=MIN_EASINESS, ge=MIN_EASINESS)
    easiness_factor: float = 0.1
    first_interval_days: int = Field(default=6, ge=1)
    daily_queue_size: int = Field(default=20, ge=0)


class EvaluationSettings(BaseSettings):
    """Answer evaluation settings.

    Similarity thresholds are strict lower bounds: a lenient similarity
    above ``high_similarity`` scores 3, above ``medium_similarity`` 2,
    above ``low_similarity`` 1, anything else 0.
    """

    model_config = SettingsConfigDict(
        env_prefix="KELMA_EVALUATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_mode: Literal["strict", "lenient"] = "lenient"
    high_similarity: float = Field(default=0.8, ge=0.0, le=1.0)
    medium_similarity: float = Field(default=0.6, ge=0.0, le=1.0)
    low_similarity: float = Field(default=0.4, ge=0.0, le=1.0)

    # Correction hints, in the order they are reported
    diacritics_hint: str = "Check the diacritics (Ħ, ħ, Ġ, ġ, Ż, ż)"
    digraph_hint: str = 'Use "għ" instead of "gh"'
    pronunciation_hint: str = 'In Maltese, "x" is pronounced like "sh"'
    whitespace_hint: str = "Remove the extra spaces"


class SpeechSettings(BaseSettings):
    """Speech capability settings."""

    model_config = SettingsConfigDict(
        env_prefix="KELMA_SPEECH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    language: str = "mt-MT"


class KelmaConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = KelmaConfig()
        queue_size = config.scheduler.daily_queue_size
    """

    model_config = SettingsConfigDict(
        env_prefix="KELMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Component settings (nested)
    scheduler: SchedulerSettings = SchedulerSettings()
    evaluation: EvaluationSettings = EvaluationSettings()
    speech: SpeechSettings = SpeechSettings()

    log_level: str = "INFO"
    log_json: bool = False
