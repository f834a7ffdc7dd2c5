# src/jsonds/cli.py
"""jsonds Command Line Interface.

Entry point for the jsonds CLI tool.
"""

import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from jsonds import __version__
from jsonds.contracts import ConfigurationError
from jsonds.core.config import JsondsSettings, load_settings
from jsonds.plugins.config_base import PluginConfigError

app = typer.Typer(
    name="jsonds",
    help="jsonds: index JSON and JSON-Lines files record by record.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"jsonds version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """jsonds: index JSON and JSON-Lines files record by record."""
    pass


def _load_or_exit(settings: str) -> JsondsSettings:
    try:
        return load_settings(Path(settings))
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


@app.command()
def run(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show which files would be ingested without executing.",
    ),
    execute: bool = typer.Option(
        False,
        "--execute",
        "-x",
        help="Actually execute the run (required for safety).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output.",
    ),
) -> None:
    """Ingest the configured files into the configured sink.

    Requires --execute flag to actually run (safety feature).
    Use --dry-run to list the selected files without executing.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    config = _load_or_exit(settings)

    if dry_run:
        from jsonds.contracts import DataStoreParams
        from jsonds.engine.selector import select_files

        params = DataStoreParams.from_dict(config.datastore.params)
        try:
            files = select_files(params, config.datastore.suffixes)
        except ConfigurationError as e:
            typer.echo(f"Configuration error: {e}", err=True)
            raise typer.Exit(1) from None
        typer.echo("Dry run mode - would ingest:")
        for path in files:
            typer.echo(f"  {path}")
        typer.echo(f"  Sink: {config.sink.plugin}")
        return

    if not execute:
        typer.echo("Configuration valid.")
        typer.echo(f"  Sink: {config.sink.plugin}")
        typer.echo("")
        typer.echo("To execute, add --execute (or -x) flag:", err=True)
        typer.echo(f"  jsonds run -s {settings} --execute", err=True)
        raise typer.Exit(1)

    try:
        result = _execute(config)
    except (ConfigurationError, PluginConfigError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo("\nRun completed")
    typer.echo(f"  Files processed: {result['files_processed']}")
    typer.echo(f"  Files skipped: {result['files_skipped']}")
    typer.echo(f"  Records stored: {result['records_stored']}")
    typer.echo(f"  Records failed: {result['records_failed']}")
    if verbose:
        for failure in result["failures"]:
            typer.echo(f"  ! {failure}")


def _execute(config: JsondsSettings) -> dict[str, Any]:
    """Build collaborators from settings and run the data store.

    Returns:
        Dict with run counts and failure summaries.
    """
    from jsonds.core.failures import FailureRecorder
    from jsonds.core.stats import CrawlerStats
    from jsonds.engine.datastore import JsonDataStore
    from jsonds.plugins.manager import PluginManager

    manager = PluginManager()
    manager.register_builtin_plugins()

    sink_cls = manager.get_sink_by_name(config.sink.plugin)
    if sink_cls is None:
        raise PluginConfigError(f"Unknown sink plugin: {config.sink.plugin}")
    evaluator_cls = manager.get_evaluator_by_name(config.evaluator.plugin)
    if evaluator_cls is None:
        raise PluginConfigError(f"Unknown evaluator plugin: {config.evaluator.plugin}")

    sink = sink_cls(dict(config.sink.options))
    failures = FailureRecorder()
    datastore = JsonDataStore(
        failure_recorder=failures,
        stats=CrawlerStats(keep_history=config.stats.keep_history),
        evaluator=evaluator_cls(dict(config.evaluator.options)),
    )
    datastore.set_file_suffixes(config.datastore.suffixes)

    try:
        result = datastore.store_data(
            config.data_config,
            sink,
            config.datastore.params,
            config.datastore.script,
            config.datastore.defaults,
        )
    finally:
        sink.close()

    return {
        "files_processed": result.files_processed,
        "files_skipped": result.files_skipped,
        "records_stored": result.records_stored,
        "records_failed": result.records_failed,
        "failures": [f"{f.url}: {f.classification}: {f.message}" for f in failures.failures],
    }


@app.command()
def validate(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate run configuration without running."""
    from jsonds.engine.expression_parser import (
        ExpressionParser,
        ExpressionSecurityError,
        ExpressionSyntaxError,
    )

    config = _load_or_exit(settings)

    errors: list[str] = []
    if config.evaluator.plugin == "python":
        for field, expression in config.datastore.script.items():
            try:
                ExpressionParser(expression)
            except (ExpressionSyntaxError, ExpressionSecurityError) as e:
                errors.append(f"script.{field}: {e}")
    if errors:
        typer.echo("Script errors:", err=True)
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Configuration valid: {Path(settings).name}")
    typer.echo(f"  Sink: {config.sink.plugin}")
    typer.echo(f"  Evaluator: {config.evaluator.plugin}")
    typer.echo(f"  Script fields: {len(config.datastore.script)}")
    typer.echo(f"  Suffixes: {', '.join(config.datastore.suffixes)}")


plugins_app = typer.Typer(help="Plugin management commands.")
app.add_typer(plugins_app, name="plugins")


@plugins_app.command("list")
def plugins_list(
    plugin_type: str | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Filter by plugin type (sink, evaluator).",
    ),
) -> None:
    """List available plugins."""
    from jsonds.plugins.manager import PluginManager

    valid_types = {"sink", "evaluator"}
    if plugin_type and plugin_type not in valid_types:
        typer.echo(f"Error: Invalid type '{plugin_type}'.", err=True)
        typer.echo(f"Valid types: {', '.join(sorted(valid_types))}", err=True)
        raise typer.Exit(1)

    manager = PluginManager()
    manager.register_builtin_plugins()
    specs = manager.specs()

    types_to_show = [plugin_type] if plugin_type else ["sink", "evaluator"]
    for ptype in types_to_show:
        typer.echo(f"\n{ptype.upper()}S:")
        for spec in specs:
            if spec.kind == ptype:
                typer.echo(f"  {spec.name:12} v{spec.version}")
    typer.echo()


if __name__ == "__main__":
    app()
