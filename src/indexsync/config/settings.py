"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (INDEXSYNC_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class AlgoliaSettings(BaseModel):
    """Algolia credentials."""

    app_id: str = Field(default="", description="Algolia application ID")
    api_key: str = Field(default="", description="Algolia API key with write access")


class SearchSettings(BaseModel):
    """Search engine selection and behavior."""

    driver: Literal["algolia", "null"] = Field(default="algolia", description="Search engine driver")
    soft_delete: bool = Field(
        default=False,
        description="Index soft-delete status and hide trashed records from searches",
    )


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the INDEXSYNC_ prefix.
    Nested settings use double underscores.

    Example:
        INDEXSYNC_ALGOLIA__APP_ID=YourAppID
        INDEXSYNC_ALGOLIA__API_KEY=...
        INDEXSYNC_SEARCH__SOFT_DELETE=true
    """

    model_config = {
        "env_prefix": "INDEXSYNC_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    algolia: AlgoliaSettings = Field(default_factory=AlgoliaSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
