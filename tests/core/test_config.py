# tests/core/test_config.py
"""Tests for configuration schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestDataStoreSettings:
    """Data store inputs validation."""

    def test_defaults(self) -> None:
        from jsonds.core.config import DataStoreSettings

        settings = DataStoreSettings(params={"files": "a.json"})
        assert settings.suffixes == (".json", ".jsonl")
        assert settings.script == {}
        assert settings.defaults == {}

    def test_suffixes_lowercased(self) -> None:
        from jsonds.core.config import DataStoreSettings

        settings = DataStoreSettings(params={"files": "a"}, suffixes=[".NDJSON"])
        assert settings.suffixes == (".ndjson",)

    def test_suffix_requires_dot(self) -> None:
        from jsonds.core.config import DataStoreSettings

        with pytest.raises(ValidationError, match="must start with '.'"):
            DataStoreSettings(params={"files": "a"}, suffixes=["json"])

    def test_suffixes_not_empty(self) -> None:
        from jsonds.core.config import DataStoreSettings

        with pytest.raises(ValidationError, match="at least one entry"):
            DataStoreSettings(params={"files": "a"}, suffixes=[])

    @pytest.mark.parametrize(
        "params", [{}, {"files": ""}, {"files": "  ", "directories": None}]
    )
    def test_requires_files_or_directories(self, params: dict[str, str | None]) -> None:
        from jsonds.core.config import DataStoreSettings

        with pytest.raises(ValidationError, match="files and directories are blank"):
            DataStoreSettings(params=params)

    def test_directories_alone_accepted(self) -> None:
        from jsonds.core.config import DataStoreSettings

        settings = DataStoreSettings(params={"directories": "/data"})
        assert settings.params["directories"] == "/data"

    def test_frozen(self) -> None:
        from jsonds.core.config import DataStoreSettings

        settings = DataStoreSettings(params={"files": "a"})
        with pytest.raises(ValidationError):
            settings.script = {"x": "y"}  # type: ignore[misc]


class TestJsondsSettings:
    def test_component_defaults(self) -> None:
        from jsonds.core.config import JsondsSettings

        settings = JsondsSettings(
            datastore={"params": {"files": "a.json"}},
            sink={"options": {"path": "out.jsonl"}},
        )

        assert settings.sink.plugin == "jsonl"
        assert settings.evaluator.plugin == "python"
        assert settings.stats.keep_history is False
        assert settings.data_config.id == "default"

    def test_datastore_required(self) -> None:
        from jsonds.core.config import JsondsSettings

        with pytest.raises(ValidationError):
            JsondsSettings(sink={})  # type: ignore[call-arg]

    def test_resolve_config_round_trips_to_plain_dict(self) -> None:
        from jsonds.core.config import JsondsSettings, resolve_config

        settings = JsondsSettings(
            datastore={"params": {"files": "a.json"}, "script": {"t": "title"}},
            sink={"plugin": "memory"},
        )

        resolved = resolve_config(settings)

        assert resolved["datastore"]["script"] == {"t": "title"}
        assert resolved["datastore"]["suffixes"] == [".json", ".jsonl"]
        assert resolved["sink"]["plugin"] == "memory"


class TestLoadSettings:
    """Test Dynaconf-based settings loading."""

    def test_load_from_yaml_file(self, tmp_path: Path) -> None:
        from jsonds.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
datastore:
  params:
    directories: /data/feed
    fileEncoding: Shift_JIS
  script:
    title: "title"
  defaults:
    role: guest
sink:
  plugin: jsonl
  options:
    path: out.jsonl
data_config:
  id: feed-1
  name: feed
""")
        settings = load_settings(config_file)

        assert settings.datastore.params["directories"] == "/data/feed"
        assert settings.datastore.params["fileEncoding"] == "Shift_JIS"
        assert settings.datastore.script == {"title": "title"}
        assert settings.datastore.defaults == {"role": "guest"}
        assert settings.sink.options == {"path": "out.jsonl"}
        assert settings.data_config.id == "feed-1"

    def test_load_with_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from jsonds.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
datastore:
  params:
    files: a.json
sink:
  plugin: jsonl
""")
        # Environment variable should override YAML
        monkeypatch.setenv("JSONDS_SINK__PLUGIN", "memory")

        settings = load_settings(config_file)
        assert settings.sink.plugin == "memory"

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from jsonds.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
datastore:
  params:
    files: a.json
  suffixes: ["json"]
sink:
  plugin: jsonl
""")
        with pytest.raises(ValidationError):
            load_settings(config_file)

    def test_load_blank_inputs_rejected(self, tmp_path: Path) -> None:
        from jsonds.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
datastore:
  params:
    label: nothing-to-read
sink:
  plugin: memory
""")
        with pytest.raises(ValidationError, match="blank"):
            load_settings(config_file)

    def test_load_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        from jsonds.core.config import load_settings

        missing_file = tmp_path / "nonexistent.yaml"
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(missing_file)
