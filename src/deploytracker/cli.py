"""Command-line interface for deploytracker."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.markup import escape
from rich.table import Table

from deploytracker.errors import DeployTrackerError
from deploytracker.extraction import ALL_PATTERNS, GitVersionSource
from deploytracker.logging_config import setup_logging
from deploytracker.models import RepositoryConfig, Settings
from deploytracker.provenance import ProvenanceAggregator, parse_version
from deploytracker.provenance.miner import extract_merge_event
from deploytracker.reporting import render_console, write_csv, write_html, write_json

app = typer.Typer(
    name="deploytracker",
    help="Release provenance from Git history - which work items, PRs and branches shipped in each tag",
    add_completion=False,
)
console = Console()


def _load_config(
    repo_path: Path,
    settings: Settings,
    workers: Optional[int] = None,
    trunk: Optional[List[str]] = None,
    fallback_window: Optional[int] = None,
) -> RepositoryConfig:
    """Settings from the environment, overridden by command-line options."""
    config = settings.repository_config(repo_path)
    overrides = {}
    if workers is not None:
        overrides["max_workers"] = workers
    if trunk:
        overrides["trunk_branches"] = trunk
    if fallback_window is not None:
        overrides["fallback_window"] = fallback_window
    if overrides:
        config = RepositoryConfig(**{**config.model_dump(), **overrides})
    return config


@app.command()
def report(
    repo_path: Path = typer.Argument(..., help="Path to Git repository"),
    csv_output: Optional[Path] = typer.Option(None, "--csv", help="Write a CSV report"),
    html_output: Optional[Path] = typer.Option(None, "--html", help="Write an HTML report"),
    json_output: Optional[Path] = typer.Option(None, "--json", help="Write a JSON report"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Releases mined concurrently"),
    trunk: Optional[List[str]] = typer.Option(None, "--trunk", "-t", help="Trunk branch name (repeatable)"),
    fallback_window: Optional[int] = typer.Option(
        None, "--fallback-window", min=1, help="Lookback for the oldest tag when the root commit is unknown"
    ),
    work_item_url: Optional[str] = typer.Option(None, "--work-item-url", help="Base URL for work item links in HTML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Collect provenance for every release tag and print it."""
    settings = Settings()
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_format)

    try:
        config = _load_config(repo_path, settings, workers, trunk, fallback_window)
        with GitVersionSource(config) as source:
            aggregator = ProvenanceAggregator(source, config)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Mining release history...", total=None)
                releases = aggregator.collect()
                progress.update(task, completed=True)

        if not releases:
            console.print("[yellow]No releases found.[/yellow]")
            return

        render_console(releases, console)
        console.print(f"\n[bold green]✓[/bold green] {len(releases)} releases")

        if csv_output:
            write_csv(releases, csv_output)
            console.print(f"[bold green]✓[/bold green] CSV saved to {csv_output}")
        if html_output:
            write_html(releases, html_output, work_item_url or settings.work_item_url)
            console.print(f"[bold green]✓[/bold green] HTML saved to {html_output}")
        if json_output:
            write_json(releases, json_output)
            console.print(f"[bold green]✓[/bold green] JSON saved to {json_output}")

    except DeployTrackerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def tags(
    repo_path: Path = typer.Argument(..., help="Path to Git repository"),
) -> None:
    """List release tags newest version first, with the range mined for each."""
    settings = Settings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        config = settings.repository_config(repo_path)
        with GitVersionSource(config) as source:
            all_tags = source.list_tags()
            ranges = ProvenanceAggregator(source, config).plan()

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Tag", style="cyan")
        table.add_column("Version", style="blue")
        table.add_column("Range", style="white")

        for commit_range in ranges:
            version = parse_version(commit_range.end)
            label = str(commit_range)
            if commit_range.approximate:
                label += " [dim](approximate)[/dim]"
            table.add_row(commit_range.end, ".".join(str(part) for part in version), label)

        console.print(table)

        ordered = {commit_range.end for commit_range in ranges}
        skipped = [tag for tag in all_tags if tag not in ordered]
        if skipped:
            console.print(f"[yellow]Skipped non-release tags:[/yellow] {', '.join(sorted(skipped))}")

    except DeployTrackerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def inspect(
    message: Optional[str] = typer.Argument(None, help="Commit message text to inspect"),
    repo_path: Path = typer.Option(Path("."), "--repo", "-r", help="Repository used with --commit"),
    commit: Optional[str] = typer.Option(None, "--commit", "-c", help="Inspect the message of this commit instead"),
) -> None:
    """Show what each extraction pattern finds in a commit message."""
    settings = Settings()
    setup_logging(settings.log_level, settings.log_format)

    if not commit and message is None:
        console.print("[bold red]Error:[/bold red] pass a message or --commit")
        raise typer.Exit(1)

    try:
        commit_hash = "-"
        if commit:
            with GitVersionSource(settings.repository_config(repo_path)) as source:
                commit_hash = source.resolve_commit(commit)
                message = source.commit_message(commit_hash)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Pattern", style="cyan")
        table.add_column("Matches", style="yellow")
        for pattern in ALL_PATTERNS:
            matches = pattern.extract(message)
            table.add_row(pattern.name, escape(", ".join(matches)) or "[dim]none[/dim]")
        console.print(table)

        event = extract_merge_event(commit_hash, message, settings.remotes)
        console.print(f"[bold]Work items:[/bold] {', '.join(event.work_item_ids) or 'N/A'}")
        console.print(f"[bold]Pull request:[/bold] {event.pull_request_id or 'N/A'}")
        console.print(f"[bold]Branches:[/bold] {escape(', '.join(event.branches)) or 'N/A'}")

    except DeployTrackerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
