"""CLI commands: one module per mode (serve, monitor, preview, database)."""

from typer import Typer

from src.cli import db_commands, monitor_mode, preview_mode, serve_mode
from src.utils.tracing import init_tracing

init_tracing()

app = Typer(help="Vending contact/feedback notification service")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_mode.serve)
    app.command()(monitor_mode.monitor)
    app.command()(preview_mode.preview)
    app.command(name="init-db")(db_commands.init_db)
    app.command(name="seed-templates")(db_commands.seed_templates)


register_commands()
