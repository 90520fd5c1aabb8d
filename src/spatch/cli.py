"""spatch CLI — Typer application with split and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from spatch import __version__

app = typer.Typer(
    name="spatch",
    help="Split unified diffs into one patch per file.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, message: str) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {escape(message)}")
    return typer.Exit(code=2)


# ── split ─────────────────────────────────────────────────────────────────────


@app.command()
def split(
    files: Optional[List[Path]] = typer.Argument(
        None, help="Patch files to split. Reads stdin if none are given."
    ),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Output directory for split patches"),
    only_new: bool = typer.Option(False, "--only-new", "-n", help="Only extract newly added files"),
    only_removed: bool = typer.Option(False, "--only-removed", "-r", help="Only extract removed files"),
    extract_file: bool = typer.Option(
        False, "--extract-file", "-x",
        help="Extract file contents rather than patches (requires -n or -r)",
    ),
    glob: Optional[str] = typer.Option(None, "--glob", help="Filter by filename glob pattern"),
    regex: Optional[str] = typer.Option(None, "--regex", help="Filter by filename regex"),
    on_collision: Optional[str] = typer.Option(
        None, "--on-collision", help="Name clash policy: overwrite | error | suffix"
    ),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Report format: terminal | json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .spatch.toml"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be written without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Split patches into one patch (or extracted file) per modified file."""
    from spatch.config.loader import ConfigError, load_config, validate_config
    from spatch.output import json_report, terminal
    from spatch.split.engine import Mode, SplitOptions, split_bytes, split_file
    from spatch.split.filters import (
        EntryFilter,
        FilterCompileError,
        Selection,
        build_name_filter,
    )
    from spatch.split.models import SplitRun
    from spatch.split.sink import Collision, DirectorySink

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        raise _fail("Config error", str(exc)) from exc

    # --- CLI overrides ---
    if only_new and only_removed:
        raise _fail("Usage error", "--only-new and --only-removed are mutually exclusive")
    if only_new:
        cfg.split.only = "new"
    elif only_removed:
        cfg.split.only = "removed"
    if extract_file:
        cfg.split.mode = "file"
    if glob is not None or regex is not None:
        cfg.filter.glob = glob or ""
        cfg.filter.regex = regex or ""
    if output_dir is not None:
        cfg.output.directory = output_dir
    if on_collision is not None:
        cfg.output.on_collision = on_collision  # type: ignore[assignment]
    if format is not None:
        cfg.output.format = format  # type: ignore[assignment]

    try:
        validate_config(cfg)
    except ConfigError as exc:
        raise _fail("Invalid options", str(exc)) from exc

    # --- Filter (compile errors surface before any input is read) ---
    try:
        name_filter = build_name_filter(cfg.filter.glob, cfg.filter.regex)
    except FilterCompileError as exc:
        raise _fail("Invalid filter", str(exc)) from exc

    options = SplitOptions(
        mode=Mode(cfg.split.mode),
        entry_filter=EntryFilter(name_filter=name_filter, selection=Selection(cfg.split.only)),
    )

    # --- Inputs and output directory ---
    out_dir = Path(cfg.output.directory)
    if not out_dir.is_dir():
        raise _fail("Error", f"Output path {out_dir} is not a directory")
    for path in files or []:
        if not path.is_file():
            raise _fail("Error", f"{path} is not a file")

    if verbose:
        console.print(f"[dim]Mode: {cfg.split.mode} ({cfg.split.only})[/dim]")
        console.print(f"[dim]Filter: {name_filter.description if name_filter else 'none'}[/dim]")
        console.print(f"[dim]Output: {out_dir} (on collision: {cfg.output.on_collision})[/dim]")

    sink = DirectorySink(
        out_dir,
        on_collision=Collision(cfg.output.on_collision),
        dry_run=dry_run,
    )
    run = SplitRun(dry_run=dry_run)

    # --- Split, one source at a time ---
    if files:
        for path in files:
            if verbose:
                console.print(f"[dim]Splitting {escape(str(path))}[/dim]")
            run.sources.append(split_file(path, sink, options))
    else:
        data = typer.get_binary_stream("stdin").read()
        run.sources.append(split_bytes(data, sink, options))

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(run))
    else:
        terminal.render(run, show_summary=cfg.output.show_summary)

    raise typer.Exit(code=1 if run.failed else 0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .spatch.toml"),
) -> None:
    """Generate a starter .spatch.toml in the current directory."""
    from spatch.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"spatch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """spatch — split unified diffs into one patch per file."""
