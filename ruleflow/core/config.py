"""Library configuration and logging setup."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Reserved maximum priority, used when a rule does not declare one.
DEFAULT_PRIORITY = 2**31 - 1

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Settings loaded from ``RULEFLOW_*`` environment variables."""

    # Logging
    log_level: str = "WARNING"

    # Engine parameter defaults
    priority_threshold: int = DEFAULT_PRIORITY
    skip_on_first_applied_rule: bool = False
    skip_on_first_failed_rule: bool = False
    skip_on_first_non_triggered_rule: bool = False

    # Rule descriptors
    rules_dir: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="RULEFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``ruleflow`` logger.

    Args:
        level: Log level name or number. Defaults to ``Settings.log_level``.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("ruleflow")
    if not any(getattr(h, "_ruleflow_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ruleflow_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
