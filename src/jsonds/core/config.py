# src/jsonds/core/config.py
"""
Configuration schema and loading for jsonds runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from jsonds.contracts import DEFAULT_FILE_SUFFIXES, DIRS_PARAM, FILES_PARAM, DataConfig


class DataStoreSettings(BaseModel):
    """Inputs of the data store: parameters, script mapping and defaults.

    Example YAML:
        datastore:
          params:
            directories: /data/feed
            fileEncoding: utf-8
            label: feed
          suffixes: [".json", ".jsonl"]
          script:
            title: "title"
            url: "'https://example.com/items/' + str(id)"
          defaults:
            role: guest
    """

    model_config = {"frozen": True}

    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Data store parameters (files, directories, fileEncoding, ...)",
    )
    suffixes: tuple[str, ...] = Field(
        default=DEFAULT_FILE_SUFFIXES,
        description="File name suffixes to accept, dot-prefixed",
    )
    script: dict[str, str] = Field(
        default_factory=dict,
        description="Output field -> expression evaluated per record",
    )
    defaults: dict[str, Any] = Field(
        default_factory=dict,
        description="Default field values copied into every record",
    )

    @field_validator("suffixes")
    @classmethod
    def validate_suffixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Suffixes must be dot-prefixed; they are compared in lowercase."""
        if not v:
            raise ValueError("suffixes must have at least one entry")
        for suffix in v:
            if not suffix.startswith("."):
                raise ValueError(f"suffix '{suffix}' must start with '.'")
        return tuple(s.lower() for s in v)

    @model_validator(mode="after")
    def validate_has_input(self) -> "DataStoreSettings":
        """At least one of files/directories must be set."""
        files = str(self.params.get(FILES_PARAM) or "").strip()
        dirs = str(self.params.get(DIRS_PARAM) or "").strip()
        if not files and not dirs:
            raise ValueError(f"{FILES_PARAM} and {DIRS_PARAM} are blank")
        return self


class SinkSettings(BaseModel):
    """Sink plugin configuration."""

    model_config = {"frozen": True}

    plugin: str = Field(default="jsonl", description="Plugin name (jsonl, memory, ...)")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Plugin-specific configuration options",
    )


class EvaluatorSettings(BaseModel):
    """Script evaluator plugin configuration."""

    model_config = {"frozen": True}

    plugin: str = Field(default="python", description="Evaluator plugin name")
    options: dict[str, Any] = Field(default_factory=dict)


class StatsSettings(BaseModel):
    """Stats recorder configuration."""

    model_config = {"frozen": True}

    keep_history: bool = Field(
        default=False,
        description="Keep per-record timing entries after the run",
    )


class JsondsSettings(BaseModel):
    """Top-level configuration for one data store run.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True}

    datastore: DataStoreSettings = Field(description="Inputs of the run")
    sink: SinkSettings = Field(description="Where records are stored")
    evaluator: EvaluatorSettings = Field(default_factory=EvaluatorSettings)
    stats: StatsSettings = Field(default_factory=StatsSettings)
    data_config: DataConfig = Field(default_factory=DataConfig)


def load_settings(config_path: Path) -> JsondsSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (JSONDS_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: JSONDS_SINK__PLUGIN for nested keys.

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="JSONDS",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): v
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return JsondsSettings(**raw_config)


def resolve_config(settings: JsondsSettings) -> dict[str, Any]:
    """Convert validated settings to a plain dict (explicit values + defaults)."""
    return settings.model_dump(mode="json")
