"""Monitor mode: run the synthetic probes once and print the report."""

import asyncio

import typer
from rich.table import Table

from src.config import APP_ENV
from src.monitor import HealthMonitor

from .shared import console, get_database, get_provider, logger

_STATUS_STYLES = {"pass": "green", "fail": "red", "warn": "yellow", "skipped": "dim"}


def monitor(
    environment: str = typer.Option(APP_ENV, "--env", "-e", help="Deployment environment (alerts only in production)"),
) -> None:
    """Run database and email probes once. Exit code 1 when the overall verdict is fail."""
    log = logger.bind(command="monitor", environment=environment)
    health = HealthMonitor(get_database(), get_provider(environment), environment=environment)
    report = asyncio.run(health.run())

    table = Table(title=f"Contact form monitor ({report.timestamp})")
    table.add_column("Probe", style="cyan")
    table.add_column("Status")
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Message")
    for name, probe in report.tests.items():
        style = _STATUS_STYLES.get(probe.status, "white")
        table.add_row(name, f"[{style}]{probe.status}[/{style}]", f"{probe.duration_ms:.1f}", probe.message)
    console.print(table)

    colour = "green" if report.overall == "pass" else "red"
    console.print(f"Overall: [{colour}]{report.overall}[/{colour}]  alerts_sent={report.alerts_sent}")
    log.info("monitor.cli.done", overall=report.overall)
    if report.overall == "fail":
        raise typer.Exit(1)
