"""Rich terminal reporter — per-source tables, skips, errors, summary."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from spatch.split.models import SourceResult, SplitRun

_STATUS_STYLE = {
    "added": "bold green",
    "deleted": "bold red",
    "modified": "bold yellow",
    "renamed": "bold cyan",
    "binary": "bold magenta",
}


def _status_pill(status: str) -> Text:
    return Text(f" {status.upper()} ", style=_STATUS_STYLE.get(status, ""))


def render(run: SplitRun, *, show_summary: bool = True) -> None:
    """Print split results to the terminal using Rich."""
    console = Console(stderr=True)

    for src in run.sources:
        _render_source(console, src, dry_run=run.dry_run)

    if show_summary:
        _print_summary(console, run)

    console.print()
    if any(s.aborted for s in run.sources):
        console.print("[bold red]❌ Some inputs could not be split completely.[/bold red]")
    elif run.failed:
        console.print("[bold yellow]⚠️  Some entries were skipped.[/bold yellow]")
    elif run.dry_run:
        console.print("[bold]Dry run — nothing was written.[/bold]")
    else:
        console.print(f"[bold green]✅ Wrote {run.total_written} file(s).[/bold green]")


def _render_source(console: Console, src: SourceResult, *, dry_run: bool) -> None:
    console.print()
    if src.written:
        table = Table(
            title=escape(src.source),
            show_lines=False,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Status", justify="center", width=12)
        table.add_column("Path", style="cyan")
        table.add_column("Would write" if dry_run else "Written to", style="magenta")
        table.add_column("Bytes", justify="right", style="green")
        for art in src.written:
            table.add_row(
                str(art.entry_index),
                _status_pill(art.status),
                Text(art.path),
                Text(str(art.destination)),
                str(art.size),
            )
        console.print(table)
    else:
        console.print(f"[bold]{escape(src.source)}[/bold]: [dim]nothing to write[/dim]")

    for skip in src.skipped:
        label = f"{skip.path}: " if skip.path else ""
        console.print(
            f"[yellow]⚠[/yellow]  skipped entry #{skip.entry_index} "
            f"(line {skip.line_no}): {escape(label + skip.reason)}"
        )

    if src.error is not None:
        title = "Malformed patch" if src.error.kind == "malformed" else "Write error"
        console.print(
            f"[bold red]{title}:[/bold red] {escape(str(src.error))} "
            f"[dim]— remaining entries of {escape(src.source)} were not processed[/dim]"
        )


def _print_summary(console: Console, run: SplitRun) -> None:
    console.print()
    console.print(f"[dim]Inputs:[/dim]        {len(run.sources)}")
    console.print(f"[dim]Entries:[/dim]       {sum(s.entries for s in run.sources)}")
    console.print(f"[dim]Written:[/dim]       {run.total_written}")
    console.print(f"[dim]Filtered out:[/dim]  {sum(s.filtered for s in run.sources)}")
    console.print(f"[dim]Skipped:[/dim]       {sum(len(s.skipped) for s in run.sources)}")
    console.print(f"[dim]Duration:[/dim]      {sum(s.duration_ms for s in run.sources):.0f}ms")
