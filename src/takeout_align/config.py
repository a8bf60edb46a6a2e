"""Configuration via pydantic-settings (.env + TAKEOUT_* env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import DEFAULT_MAX_EXT_LEN, SIDECAR_EXTENSION

LOG_FILE_NAME = "takeout-align.log"


class AlignConfig(BaseSettings):
    """All configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TAKEOUT_",
        extra="ignore",
    )

    # -- Logging --
    log_dir: Path | None = None
    log_level: str = "INFO"
    verbose: bool = False

    # -- Behavior --
    dry_run: bool = False
    sidecar_extension: str = SIDECAR_EXTENSION
    max_ext_len: int = DEFAULT_MAX_EXT_LEN

    def validate_settings(self) -> None:
        """Reject values the passes cannot work with."""
        if self.max_ext_len <= 0:
            raise ConfigError(f"max_ext_len must be positive, got {self.max_ext_len}")
        if not self.sidecar_extension.startswith(".") or "/" in self.sidecar_extension:
            raise ConfigError(
                f"sidecar_extension must look like '.yml', got {self.sidecar_extension!r}"
            )

    def setup_logging(self) -> None:
        """Configure loguru sinks for a run."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<8} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        level = "DEBUG" if self.verbose else self.log_level.upper()
        logger.add(
            sys.stderr,
            format=log_format,
            level=level,
            filter=_default_extra,
        )

        if self.log_dir is None:
            return
        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / LOG_FILE_NAME),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
