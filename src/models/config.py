"""Analysis configuration model using pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Engine settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    max_workers: int = 1
    display_window: int = 10
    word_tree_window: int = 5
    strip_punctuation: bool = False
    normalize_text: bool = False
    ignore_references: bool = False
    progress_log_every: int = 10

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            msg = f"log_level must be one of {', '.join(sorted(valid_levels))}"
            raise ValueError(msg)
        return upper_value

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, value: int) -> int:
        """Max workers must be between 1 and 32."""
        if value < 1 or value > 32:
            msg = "max_workers must be between 1 and 32"
            raise ValueError(msg)
        return value

    @field_validator("display_window", "word_tree_window")
    @classmethod
    def validate_window(cls, value: int) -> int:
        """Windows must hold at least one word."""
        if value < 1:
            msg = "window sizes must be >= 1"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_word_tree_window(self) -> AnalysisSettings:
        """Word trees cannot reach past the stored display window."""
        if self.word_tree_window > self.display_window:
            msg = "word_tree_window must not exceed display_window"
            raise ValueError(msg)
        return self
