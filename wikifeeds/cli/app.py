"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .most_read import most_read_command

app = typer.Typer(
    name="wikifeeds",
    help="Wikifeeds - most-read article feeds for wiki sites",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("most-read")(most_read_command)


if __name__ == "__main__":
    app()
