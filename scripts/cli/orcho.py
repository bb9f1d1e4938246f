"""Main CLI entry point for Orcho."""

import typer

from app.core.config_file import get_settings
from app.core.logging import setup_logging
from scripts.cli.commands import integrations

app = typer.Typer(
    name="orcho",
    help="Orcho CLI - connect third-party providers",
    add_completion=False,
)

# Register subcommands
app.add_typer(integrations.app, name="integrations")


def main() -> None:
    """Main entry point."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    app()


if __name__ == "__main__":
    main()
