"""
persist-models CLI.

Commands:
- parse: Parse model files and print a summary or the JSON AST
- check: Parse model files and report which ones fail
"""

from __future__ import annotations

import json
import logging
import platform
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from persist_models import __version__
from persist_models.core.errors import ConfigError, ParseError
from persist_models.core.loader import ModelsFileResult, collect_model_files, load_models_file
from persist_models.core.manifest import ModelsManifest, find_manifest, load_manifest

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="Parse persistent entity model definitions.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"persist-models {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """persist-models CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_manifest(manifest: Path | None, files: list[Path]) -> ModelsManifest:
    """Load the given manifest, or look for one next to the first file."""
    if manifest is None and files:
        manifest = find_manifest(files[0])
    if manifest is None:
        return ModelsManifest()
    try:
        return load_manifest(manifest)
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _files_or_manifest_paths(files: list[Path] | None, manifest: ModelsManifest) -> list[Path]:
    paths = list(files) if files else manifest.resolved_paths()
    if not paths:
        err_console.print("[red]No model files given and none configured in the manifest.[/red]")
        raise typer.Exit(code=1)
    return collect_model_files(paths, manifest)


def _print_summary(result: ModelsFileResult) -> None:
    table = Table(title=str(result.file))
    table.add_column("Entity")
    table.add_column("JSON")
    table.add_column("Table")
    table.add_column("Fields", justify="right")
    table.add_column("Constraints", justify="right")

    for entity in result.models.entities:
        table.add_row(
            entity.name,
            "yes" if entity.derives_json else "",
            entity.sql_table_name or "",
            str(len(entity.fields)),
            str(len(entity.uniques) + len(entity.foreigns) + (1 if entity.primary else 0)),
        )

    console.print(table)


@app.command(name="parse")
def parse_command(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Model files or directories (default: manifest paths)"),
    ] = None,
    embedded: Annotated[
        bool | None,
        typer.Option(
            "--embedded/--full",
            help="Parse as an embedded block or as a whole file (default: by suffix)",
        ),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output the AST as JSON")] = False,
    manifest_path: Annotated[
        Path | None, typer.Option("--manifest", "-m", help="Path to persist_models.toml")
    ] = None,
) -> None:
    """Parse model files and show what they declare."""
    manifest = _resolve_manifest(manifest_path, files or [])
    results: list[ModelsFileResult] = []

    for path in _files_or_manifest_paths(files, manifest):
        try:
            results.append(load_models_file(path, manifest, embedded))
        except ParseError as e:
            err_console.print(f"[red]Parse error:[/red] {escape(str(e))}")
            raise typer.Exit(code=1)
        except OSError as e:
            err_console.print(f"[red]Cannot read {path}:[/red] {escape(str(e))}")
            raise typer.Exit(code=1)

    if output_json:
        payload = [
            {"file": str(r.file), "embedded": r.embedded, "models": r.models.model_dump(mode="json")}
            for r in results
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    for result in results:
        _print_summary(result)


@app.command(name="check")
def check_command(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Model files or directories (default: manifest paths)"),
    ] = None,
    embedded: Annotated[
        bool | None,
        typer.Option("--embedded/--full", help="Parse mode (default: by suffix)"),
    ] = None,
    manifest_path: Annotated[
        Path | None, typer.Option("--manifest", "-m", help="Path to persist_models.toml")
    ] = None,
) -> None:
    """Check that model files parse; exit 1 if any fails."""
    manifest = _resolve_manifest(manifest_path, files or [])
    failed = 0

    for path in _files_or_manifest_paths(files, manifest):
        try:
            result = load_models_file(path, manifest, embedded)
        except (ParseError, OSError) as e:
            failed += 1
            console.print(f"[red]FAIL[/red] {path}\n{escape(str(e))}")
            continue
        console.print(f"[green]OK[/green]   {path} ({len(result.models.entities)} entities)")

    if failed:
        console.print(f"\n[red]{failed} file(s) failed[/red]")
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
