"""Serve mode: run the FastAPI app with uvicorn."""

import sys

import typer
import uvicorn

from src.config import APP_ENV, SERVER_HOST, SERVER_PORT
from src.web.server import create_app

from .shared import console, get_database, logger


def serve(
    port: int = typer.Option(SERVER_PORT, "--port", "-p", help="Port for the HTTP server"),
    host: str = typer.Option(SERVER_HOST, "--host", "-h", help="Bind host"),
    environment: str = typer.Option(APP_ENV, "--env", "-e", help="Deployment environment (development|production)"),
) -> None:
    """Start the form intake server."""
    log = logger.bind(command="serve", port=port, environment=environment)
    log.info("serve.start")

    app = create_app(database=get_database(), environment=environment)
    mode = getattr(app.state.provider, "mode", "unknown")
    if mode == "fallback":
        console.print("[yellow]RESEND_API_KEY is not set: emails will be accepted but not delivered.[/yellow]")

    console.print(f"[green]Starting server on http://{host}:{port}[/green] [dim](env={environment}, mail={mode})[/dim]")
    console.print("[dim]Endpoints: /api/contact, /api/feedback, /api/exit-intent, /api/cron/contact-form-monitor, /health[/dim]")
    try:
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level="info",
            timeout_graceful_shutdown=15,
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
