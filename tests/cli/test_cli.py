"""Tests for jsonds CLI."""

from pathlib import Path

import yaml
from typer.testing import CliRunner

# Note: In Click 8.0+, mix_stderr is no longer a CliRunner parameter.
# Stderr output is combined with stdout by default when using CliRunner.invoke()
runner = CliRunner()


def _settings(tmp_path: Path, script: dict[str, str]) -> Path:
    settings_file = tmp_path / "settings.yaml"
    settings_file.write_text(
        yaml.dump(
            {
                "datastore": {"params": {"files": "a.json"}, "script": script},
                "sink": {"plugin": "memory"},
            }
        )
    )
    return settings_file


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_flag(self) -> None:
        """--version shows version info."""
        from jsonds.cli import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "jsonds version 0.1.0" in result.stdout

    def test_help_flag(self) -> None:
        """--help shows available commands."""
        from jsonds.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.stdout
        assert "validate" in result.stdout
        assert "plugins" in result.stdout


class TestValidateCommand:
    def test_valid_configuration(self, tmp_path: Path) -> None:
        from jsonds.cli import app

        settings = _settings(tmp_path, {"title": "title", "url": "record.get('url')"})

        result = runner.invoke(app, ["validate", "--settings", str(settings)])

        assert result.exit_code == 0, result.output
        assert "Configuration valid: settings.yaml" in result.output
        assert "Script fields: 2" in result.output

    def test_forbidden_expression_reported(self, tmp_path: Path) -> None:
        from jsonds.cli import app

        settings = _settings(tmp_path, {"title": "title.upper()", "bad": "x ="})

        result = runner.invoke(app, ["validate", "--settings", str(settings)])

        assert result.exit_code == 1
        assert "Script errors:" in result.output
        assert "script.title: Forbidden record attribute: upper" in result.output
        assert "script.bad: Invalid syntax" in result.output

    def test_schema_errors_listed(self, tmp_path: Path) -> None:
        from jsonds.cli import app

        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text(
            yaml.dump(
                {
                    "datastore": {"params": {"files": "a.json"}, "suffixes": ["json"]},
                    "sink": {"plugin": "memory"},
                }
            )
        )

        result = runner.invoke(app, ["validate", "--settings", str(settings_file)])

        assert result.exit_code == 1
        assert "Configuration errors:" in result.output
        assert "datastore.suffixes" in result.output


class TestPluginsList:
    def test_lists_all(self) -> None:
        from jsonds.cli import app

        result = runner.invoke(app, ["plugins", "list"])

        assert result.exit_code == 0
        assert "SINKS:" in result.output
        assert "jsonl" in result.output
        assert "memory" in result.output
        assert "EVALUATORS:" in result.output
        assert "python" in result.output

    def test_filter_by_type(self) -> None:
        from jsonds.cli import app

        result = runner.invoke(app, ["plugins", "list", "--type", "evaluator"])

        assert result.exit_code == 0
        assert "python" in result.output
        assert "SINKS:" not in result.output

    def test_invalid_type(self) -> None:
        from jsonds.cli import app

        result = runner.invoke(app, ["plugins", "list", "--type", "source"])

        assert result.exit_code == 1
        assert "Invalid type 'source'" in result.output
