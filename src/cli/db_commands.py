"""Database commands: create tables, seed the default email templates."""

from pathlib import Path
from typing import Optional

import typer

from src.db.seed_data import seed_default_templates

from .shared import console, get_database, logger


def init_db() -> None:
    """Create all tables for DATABASE_URL (no-op for tables that exist)."""
    db = get_database()
    db.init()
    console.print(f"[green]Tables ready[/green] [dim]({db.url})[/dim]")
    logger.info("init_db.done", url=db.url)


def seed_templates(
    path: Optional[Path] = typer.Option(None, "--path", help="Seed YAML (default: EMAIL_TEMPLATES_SEED_PATH)"),
) -> None:
    """Insert the default email templates that are not in the database yet."""
    log = logger.bind(command="seed-templates")
    try:
        inserted = seed_default_templates(get_database(), path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Seed error: {e}[/red]")
        log.error("seed_templates.fail", error=str(e))
        raise typer.Exit(1) from e
    if inserted:
        console.print(f"[green]Inserted {len(inserted)} template(s):[/green] {', '.join(inserted)}")
    else:
        console.print("[dim]All default templates already present.[/dim]")
