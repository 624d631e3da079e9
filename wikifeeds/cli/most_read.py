"""Most-read command implementation."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..errors import FeedError
from ..log import setup_logging
from ..models import MostReadResponse
from ..pipeline import most_read_sync

console = Console()
err_console = Console(stderr=True)


def print_feed(response: MostReadResponse) -> None:
    """Print a most-read feed as a table."""
    if response.is_empty:
        console.print("[yellow]No most-read data available.[/yellow]")
        return

    feed = response.payload
    table = Table(title=f"Most read on {feed.date}")
    table.add_column("Rank", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Views", style="green", justify="right")
    table.add_column("History", style="dim")

    for article in feed.articles:
        history = " ".join(str(entry.views) for entry in article.view_history)
        table.add_row(
            str(article.rank),
            article.summary.normalizedtitle or article.title,
            f"{article.views:,}",
            history,
        )

    console.print(table)
    print_headers(response, console)


def print_headers(response: MostReadResponse, target: Console) -> None:
    """Print the response headers of a feed."""
    for name, value in response.headers().items():
        target.print(f"[dim]{name}: {value}[/dim]", highlight=False)


def most_read_command(
    domain: str = typer.Argument(..., help="Site domain, e.g. en.wikipedia.org"),
    year: str = typer.Argument(..., help="Year (YYYY)"),
    month: str = typer.Argument(..., help="Month (MM)"),
    day: str = typer.Argument(..., help="Day (DD)"),
    aggregated: bool = typer.Option(
        False,
        "--aggregated",
        "-a",
        help="Best-effort mode: use the previous day and return empty on failure",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON body"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Show the most read articles of a site on a date."""
    try:
        config = Config(config_path)
        setup_logging(config.config.log_level)

        response = most_read_sync(
            domain,
            year,
            month,
            day,
            aggregated=aggregated,
            config=config.config,
            user_agent=config.user_agent,
        )
    except FeedError as e:
        console.print(f"[red]{e.title} ({e.status}): {e.detail}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(response.body(), ensure_ascii=False))
        print_headers(response, err_console)
    else:
        print_feed(response)
