"""Preview mode: render a customer template the way the pipeline would, without sending."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from src.models.email import RenderedEmail
from src.templating import TemplateRenderer
from src.utils.body_sanitizer import html_to_text

from .shared import console, get_database, logger, parse_vars


def _no_fallback() -> RenderedEmail:
    return RenderedEmail(subject="(no active template: static fallback would be used)", body="")


def preview(
    template_id: str = typer.Argument(..., help="Template id, e.g. contact-confirmation"),
    var: list[str] = typer.Option([], "--var", "-v", help="Variable as Key=Value (repeatable)"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the rendered HTML here"),
) -> None:
    """Render TEMPLATE_ID with the given variables and show subject, source and a text preview."""
    try:
        variables = parse_vars(var)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e

    renderer = TemplateRenderer(get_database())
    resolution = asyncio.run(renderer.resolve(template_id, variables, _no_fallback))
    logger.info("preview.rendered", template_id=template_id, source=resolution.source)

    console.print(f"[bold]Source:[/bold] {resolution.source}")
    console.print(f"[bold]Subject:[/bold] {resolution.subject}")
    if resolution.body:
        console.print(html_to_text(resolution.body))
    if out is not None and resolution.body:
        out.write_text(resolution.body, encoding="utf-8")
        console.print(f"[dim]HTML written to {out}[/dim]")
