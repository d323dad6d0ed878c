# src/snapmatch/cli.py
"""
snapmatch Command Line Interface (CLI).

Read-only tooling around a snapshot tree, built with `typer` and `rich`.
Snapshots are never created or rewritten from here: refreshing a stale
snapshot means deleting its file and re-running the test.

Commands
--------
- **list**:  table of every snapshot under the root, with line count and size.
- **show**:  print one snapshot with JSON highlighting.
- **check**: re-encode a JSON document canonically and diff it against an
  existing snapshot (exit 0 match, 1 mismatch, 2 missing/unreadable).

Usage
-----
    $ snapmatch list --root tests/resources/snapshots
    $ snapmatch check out/cart.json tests/resources/snapshots/tests/test_cart/test_totals-0.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from snapmatch.compare.comparator import SnapshotComparator
from snapmatch.compare.encoder import JsonEncoder
from snapmatch.compare.storage import SnapshotStore, iter_snapshots
from snapmatch.core.settings import load_settings

# Ensure SNAPMATCH_* variables from .env are visible before settings are read
load_dotenv()

app = typer.Typer(
    help="snapmatch: inspect and check snapshot files.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
console = Console()

EXIT_MISMATCH = 1
EXIT_MISSING = 2


def _default_root() -> Path:
    return load_settings().snapshot_dir


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command("list")  # type: ignore[misc]
def list_snapshots(
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Snapshot root (default: SNAPMATCH_SNAPSHOT_DIR)."),
    ] = None,
) -> None:
    """List snapshot files under the root directory."""
    base = root if root is not None else _default_root()
    extension = load_settings().extension
    store = SnapshotStore()

    table = Table(title=f"Snapshots in {base}")
    table.add_column("Snapshot", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Bytes", justify="right")

    count = 0
    for path in iter_snapshots(base, extension):
        lines = store.read_lines(path)
        line_count = str(len(lines.unwrap())) if lines.is_ok() else "[red]unreadable[/red]"
        table.add_row(path.relative_to(base).as_posix(), line_count, str(path.stat().st_size))
        count += 1

    if count == 0:
        console.print(f"[dim]No snapshots found in {base}[/dim]")
        return
    console.print(table)


@app.command()  # type: ignore[misc]
def show(
    snapshot: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=True, dir_okay=False, readable=True,
                       help="Path to a snapshot file."),
    ],
) -> None:
    """Print a snapshot file with syntax highlighting."""
    result = SnapshotStore().read_text(snapshot)
    if result.is_err():
        console.print(f"[bold red]❌ {result.unwrap_err()}[/bold red]")
        raise typer.Exit(code=EXIT_MISSING)
    console.print(Panel(Syntax(result.unwrap(), "json"), title=str(snapshot), border_style="cyan"))


@app.command()  # type: ignore[misc]
def check(
    value_file: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=True, dir_okay=False, readable=True,
                       help="JSON document holding the actual value."),
    ],
    snapshot: Annotated[Path, typer.Argument(help="Existing snapshot to compare against.")],
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Encode on a single line (for snapshots written that way)."),
    ] = False,
) -> None:
    """Compare a JSON document against an existing snapshot without touching it."""
    try:
        value = json.loads(value_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[bold red]❌ Could not load {value_file}: {e}[/bold red]")
        raise typer.Exit(code=EXIT_MISSING) from e

    store = SnapshotStore()
    if not store.exists(snapshot):
        console.print(f"[bold red]❌ No snapshot at {snapshot}[/bold red]")
        raise typer.Exit(code=EXIT_MISSING)

    comparator = SnapshotComparator(
        encoder=JsonEncoder(indent=None if compact else 2),
        store=store,
        echo_report=False,
    )
    verdict = comparator.compare(value, snapshot)

    if verdict.outcome == "read_error":
        console.print(f"[bold red]❌ {verdict.error}[/bold red]")
        raise typer.Exit(code=EXIT_MISSING)
    if not verdict.passed:
        console.print(Panel(Text(verdict.report or ""), title="Snapshot mismatch", border_style="red"))
        raise typer.Exit(code=EXIT_MISMATCH)
    console.print(f"[bold green]✅ {value_file} matches {snapshot}[/bold green]")


if __name__ == "__main__":
    app()
