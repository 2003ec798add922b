"""
jsonscrub_cli.output
~~~~~~~~~~~~~~~~~~~~
Human-readable summaries, printed on stderr with rich.

stdout carries the transcoded document and is never written here.
"""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


def print_stats(counts: Mapping[str, int]) -> None:
    """Print how many values were masked per key."""
    if not counts:
        console.print("[yellow]No values masked.[/yellow]")
        return

    table = Table(title=f"Masked values ({sum(counts.values())} total)")
    table.add_column("Key", style="cyan")
    table.add_column("Count", style="green", justify="right")

    for key, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(key, str(count))

    console.print(table)
