"""CLI interface for slplint using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slplint import __description__, __version__
from slplint.catalog import CatalogClient, iter_node_configs
from slplint.config import LogLevel, SlplintConfig, load_config
from slplint.exceptions import CatalogError, ConfigError, PipelineValidationError
from slplint.parser import read_source
from slplint.render import ReportRenderer
from slplint.scaffold import PipelineScaffolder, write_pipeline
from slplint.validation import check_file, validate_file

app = typer.Typer(
    name="slplint",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

catalog_app = typer.Typer(help="Look up snap types in the SnapLogic catalog.")
app.add_typer(catalog_app, name="catalog")

# Pre-commit entry point: one file, no flags
hook_app = typer.Typer(name="slplint-hook", add_completion=False)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def _configure_logging(level: LogLevel | str) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(LOG_LEVELS[LogLevel(level)])


def _load_settings(config_path: Path | None, log_level: LogLevel | None) -> SlplintConfig:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)
    _configure_logging(log_level or config.logging.level)
    return config


def _settings(ctx: typer.Context) -> SlplintConfig:
    return ctx.obj


def _fail_line(source: str, error: Exception) -> None:
    err_console.print(f"{escape(source)}: {escape(str(error))}", highlight=False, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"slplint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .slplint.json)")
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Logging level (default: from config, else warn)")
    ] = None,
) -> None:
    """slplint - Structural validator for SnapLogic pipeline exports."""
    ctx.obj = _load_settings(config, log_level)


@hook_app.command()
def hook(
    file: Annotated[str, typer.Argument(help="Pipeline file to check, or - for stdin")],
) -> None:
    """Check one pipeline file; silent on success, one line on failure."""
    config = _load_settings(None, None)
    try:
        check_file(file, config)
    except (OSError, PipelineValidationError) as e:
        _fail_line(file, e)
        raise typer.Exit(1)


@app.command()
def check(
    ctx: typer.Context,
    files: Annotated[list[str], typer.Argument(help="Pipeline files to check, or - for stdin")],
) -> None:
    """Fast check of one or more pipeline files, stopping at each file's first failure."""
    config = _settings(ctx)
    failed = 0
    for file in files:
        try:
            check_file(file, config)
        except (OSError, PipelineValidationError) as e:
            _fail_line(file, e)
            failed += 1
    raise typer.Exit(1 if failed else 0)


@app.command()
def validate(
    ctx: typer.Context,
    file: Annotated[str, typer.Argument(help="Pipeline file to validate, or - for stdin")],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detail lines for each check")
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
    json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Emit the report as JSON")
    ] = False,
) -> None:
    """Run every structural check on a pipeline file and report all findings."""
    config = _settings(ctx)
    try:
        report = validate_file(file, config)
    except OSError as e:
        err_console.print(f"[red]❌[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    if json:
        console.print(jsonlib.dumps(report.to_dict(), indent=2), markup=False, highlight=False, soft_wrap=True)
    else:
        ReportRenderer(console, err_console, verbose=verbose, quiet=quiet).render(report)

    raise typer.Exit(report.exit_code)


@app.command()
def new(
    ctx: typer.Context,
    output: Annotated[Path, typer.Argument(help="Where to write the new .slp file")],
    snaps: Annotated[
        list[str],
        typer.Option("--snap", "-s", help="Snap class_id, repeat in pipeline order")
    ],
    label: Annotated[str, typer.Option("--label", "-l", help="Pipeline label")] = "New Pipeline",
    author: Annotated[Optional[str], typer.Option("--author", help="Pipeline author")] = None,
    notes: Annotated[str, typer.Option("--notes", help="Pipeline notes")] = "",
    purpose: Annotated[str, typer.Option("--purpose", help="Pipeline purpose")] = "",
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
) -> None:
    """Scaffold a linear pipeline from a list of snap types."""
    config = _settings(ctx)
    scaffolder = PipelineScaffolder(config.scaffold, config.document)
    try:
        document = scaffolder.build(snaps, label=label, author=author, notes=notes, purpose=purpose)
        path = write_pipeline(document, output, force=force)
    except (ValueError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    console.print(f"[green]Created pipeline:[/green] {escape(str(path))} ({len(snaps)} snap(s))", soft_wrap=True)


def _catalog_client(ctx: typer.Context) -> CatalogClient:
    return CatalogClient(_settings(ctx).catalog)


@catalog_app.command("search")
def catalog_search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search text")],
    category: Annotated[Optional[str], typer.Option("--category", help="Limit to one category")] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum number of results")] = 20,
) -> None:
    """Search snap types by name and description."""
    try:
        entries = _catalog_client(ctx).search(query, category)
    except CatalogError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    if not entries:
        console.print(f"[yellow]No snaps match '{escape(query)}'[/yellow]")
        return

    table = Table(title=f"Snaps matching '{escape(query)}'")
    table.add_column("Class ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Category", style="green")
    table.add_column("Version", style="dim", justify="right")
    for entry in entries[:limit]:
        table.add_row(entry.class_id, entry.name, entry.category, str(entry.version))
    console.print(table)


@catalog_app.command("categories")
def catalog_categories(ctx: typer.Context) -> None:
    """List snap categories with their snap counts."""
    try:
        categories = _catalog_client(ctx).categories()
    except CatalogError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title="Snap categories")
    table.add_column("Category", style="cyan")
    table.add_column("Snaps", style="white", justify="right")
    for category in categories:
        table.add_row(category["name"], str(category["count"]))
    console.print(table)


@catalog_app.command("show")
def catalog_show(
    ctx: typer.Context,
    class_id: Annotated[str, typer.Argument(help="Snap class_id")],
) -> None:
    """Print a basic configuration skeleton for a snap type."""
    try:
        schema = _catalog_client(ctx).describe(class_id)
    except CatalogError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)
    console.print(jsonlib.dumps(schema, indent=2), markup=False, highlight=False, soft_wrap=True)


@catalog_app.command("check")
def catalog_check(
    ctx: typer.Context,
    file: Annotated[str, typer.Argument(help="Pipeline file whose snaps should be checked")],
) -> None:
    """Check every snap of a pipeline against the catalog."""
    config = _settings(ctx)
    client = CatalogClient(config.catalog)
    try:
        text, source = read_source(file)
        configs = list(iter_node_configs(text, config.document))
        results = [(key, client.check_node(node)) for key, node in configs]
    except (OSError, PipelineValidationError, CatalogError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    failed = 0
    for key, result in results:
        if result.valid:
            console.print(f"[green]✅[/green] {escape(key)}", soft_wrap=True)
        else:
            failed += 1
            for message in result.errors:
                err_console.print(f"[red]❌[/red] {escape(key)}: {escape(message)}", soft_wrap=True)
        for message in result.warnings:
            console.print(f"[yellow]⚠[/yellow] {escape(key)}: {escape(message)}", soft_wrap=True)

    console.print(f"Checked {len(results)} snap(s) in {escape(source)}, {failed} with errors", soft_wrap=True)
    raise typer.Exit(1 if failed else 0)


if __name__ == "__main__":
    app()
