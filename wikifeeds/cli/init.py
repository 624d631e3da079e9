"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_PATH, ConfigModel, save_config

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to write",
    ),
    user_agent: Optional[str] = typer.Option(
        None,
        "--user-agent",
        help="User-Agent sent to upstream services",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a default Wikifeeds configuration file."""
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        console.print("Use --force to overwrite it.")
        raise typer.Exit(1)

    config = ConfigModel()
    if user_agent:
        config.upstream.user_agent = user_agent
    config.upstream.user_agent_env = "WIKIFEEDS_USER_AGENT"

    save_config(config, config_path)

    console.print(Panel.fit(
        f"[green]✅ Configuration written[/green]\n\n"
        f"File: {config_path}\n"
        f"User-Agent override: $WIKIFEEDS_USER_AGENT",
        style="green",
    ))
