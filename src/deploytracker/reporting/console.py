"""Console rendering of release provenance."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from deploytracker.models import Release

NOT_AVAILABLE = "N/A"


def chunk_lines(values: Sequence[str], per_line: int = 5, separator: str = "\n") -> str:
    """Join values as comma-separated lines of at most ``per_line`` items."""
    if not values:
        return ""
    lines = [", ".join(values[i : i + per_line]) for i in range(0, len(values), per_line)]
    return separator.join(lines)


def build_table(releases: List[Release]) -> Table:
    """Build a rich table with one row per release."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Date", style="blue")
    table.add_column("Mainline", justify="center")
    table.add_column("Work Items", style="yellow")
    table.add_column("PR", justify="right", style="green")
    table.add_column("Branches", style="white")

    for release in releases:
        table.add_row(
            escape(release.tag),
            release.release_date.strftime("%Y-%m-%d %H:%M"),
            "[green]yes[/green]" if release.is_mainline_commit else "[red]no[/red]",
            escape(chunk_lines(release.work_item_ids)) or NOT_AVAILABLE,
            release.pull_request_id or NOT_AVAILABLE,
            escape("\n".join(release.branches)) or NOT_AVAILABLE,
        )
    return table


def render_console(releases: List[Release], console: Optional[Console] = None) -> None:
    """Print the provenance table."""
    console = console or Console()
    console.print(build_table(releases))
