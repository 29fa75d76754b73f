"""Runtime settings for verified publisher selection."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_PREFIX = "PUBTRUST_"

# Settings field -> environment variable suffix
_ENV_FIELDS = {
    "top_n": "TOP_N",
    "admission_threshold": "ADMISSION_THRESHOLD",
    "score_cap": "SCORE_CAP",
    "automation_marker": "AUTOMATION_MARKER",
    "allowlist_path": "ALLOWLIST",
    "log_level": "LOG_LEVEL",
}


class Settings(BaseModel):
    """Selection settings.

    Defaults reproduce the reference ranking: top 5 admitted outright,
    everyone else needs a contribution score of at least 450.
    """

    top_n: int = Field(default=5, ge=0)
    admission_threshold: float = 450.0
    score_cap: float = Field(default=1000.0, gt=0)
    automation_marker: str = Field(default="[bot]", min_length=1)
    allowlist_path: Path | None = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> "Settings":
        """Build settings from PUBTRUST_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
            **overrides: Values that take precedence over the environment.
                None values are ignored.

        Raises:
            ValueError: If a value cannot be parsed.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name, suffix in _ENV_FIELDS.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw not in (None, ""):
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid pubtrust settings: {e}") from e
