"""trunkdump CLI: Typer application with parse and init commands."""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console

from trunkdump import __version__

app = typer.Typer(
    name="trunkdump",
    help="Read a Subversion dump and show the revisions kept under a root path.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


# ── parse ─────────────────────────────────────────────────────────────────────


@app.command()
def parse(
    dumpfile: str = typer.Argument(..., help="svnadmin dump file, or '-' for stdin"),
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Subtree to keep (default trunk/)"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Filter token to include, repeatable"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Filter token to exclude, repeatable"),
    filters: Optional[str] = typer.Option(None, "--filters", help="YAML file with include/exclude lists"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .trunkdump.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v per revision, -vv per node"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress output"),
    tz_offset: Optional[int] = typer.Option(None, "--tz-offset", help="Minutes added to svn:date"),
    drop_top_level_adds: bool = typer.Option(
        False, "--drop-top-level-adds", help="Also ignore adds of files directly in the root"
    ),
    on_io_error: Optional[str] = typer.Option(None, "--on-io-error", help="raise | drop"),
) -> None:
    """Parse DUMPFILE and print the retained revisions."""
    from trunkdump.config.loader import ConfigError, load_config
    from trunkdump.dump.context import normalize_root
    from trunkdump.dump.errors import DumpError
    from trunkdump.dump.parser import parse_dump
    from trunkdump.filters.expression import FilterSyntaxError
    from trunkdump.filters.path_filter import load_filter_file
    from trunkdump.output import json_report, terminal
    from trunkdump.output.progress import ConsoleReporter

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if on_io_error:
        if on_io_error not in ("raise", "drop"):
            console.print(f"[bold red]Invalid --on-io-error:[/bold red] {on_io_error}")
            raise typer.Exit(code=2)
        cfg.parse.on_io_error = on_io_error  # type: ignore[assignment]
    if root:
        cfg.parse.root = root
    if tz_offset is not None:
        cfg.parse.tz_offset_minutes = tz_offset
    if drop_top_level_adds:
        cfg.parse.drop_top_level_adds = True
    if quiet:
        cfg.parse.verbosity = 0
    elif verbose:
        cfg.parse.verbosity = min(verbose, 2)

    # --- Filters ---
    include_specs: list = [*cfg.filter.include, *(include or [])]
    exclude_specs: list = [*cfg.filter.exclude, *(exclude or [])]
    filter_file = filters or cfg.filter.file
    if filter_file:
        try:
            from_file = load_filter_file(Path(filter_file))
        except (OSError, FilterSyntaxError, yaml.YAMLError) as exc:
            console.print(f"[bold red]Filter error:[/bold red] {filter_file}: {exc}")
            raise typer.Exit(code=2) from exc
        include_specs.extend(from_file.include or [])
        exclude_specs.extend(from_file.exclude or [])

    root_prefix = normalize_root(cfg.parse.root)
    offset = (
        timedelta(minutes=cfg.parse.tz_offset_minutes)
        if cfg.parse.tz_offset_minutes is not None
        else None
    )
    source = sys.stdin.buffer if dumpfile == "-" else Path(dumpfile)
    if isinstance(source, Path) and not source.is_file():
        console.print(f"[bold red]Error:[/bold red] dump file not found: {dumpfile}")
        raise typer.Exit(code=2)

    # --- Run parser ---
    try:
        revisions = parse_dump(
            source,
            root_prefix,
            exclude=exclude_specs,
            include=include_specs,
            reporter=ConsoleReporter(cfg.parse.verbosity, console),
            tz_offset=offset,
            on_io_error=cfg.parse.on_io_error,
            drop_top_level_adds=cfg.parse.drop_top_level_adds,
        )
    except FilterSyntaxError as exc:
        console.print(f"[bold red]Filter error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except DumpError as exc:
        console.print(f"[bold red]Dump error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(revisions, root=root_prefix))
    else:
        terminal.render(
            revisions,
            root=root_prefix,
            show_nodes=cfg.output.show_nodes,
            show_log=cfg.output.show_log,
        )

    if output:
        Path(output).write_text(json_report.render(revisions, root=root_prefix), encoding="utf-8")
        if cfg.parse.verbosity:
            console.print(f"[dim]Report written to {output}[/dim]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .trunkdump.toml in the current directory."""
    from trunkdump.config.defaults import DEFAULT_TOML
    from trunkdump.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"trunkdump {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """trunkdump: Subversion dump to revision model."""
