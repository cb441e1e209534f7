"""Shared CLI helpers: console, logger, collaborators built from config."""

from rich.console import Console

from src.config import APP_ENV
from src.db import Database
from src.mail_provider import MailProvider, build_provider
from src.utils.logger import get_logger

console = Console()
logger = get_logger("vending_notifications.cli")


def get_database(url: str | None = None) -> Database:
    """Database for the configured DATABASE_URL (or an explicit override)."""
    return Database(url)


def get_provider(environment: str | None = None) -> MailProvider:
    """Mail provider for the given (or configured) deployment environment."""
    return build_provider(environment=environment or APP_ENV)


def parse_vars(pairs: list[str]) -> dict[str, str]:
    """Turn repeated `Key=Value` options into a dict. Raises ValueError on a pair without '='."""
    out: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected Key=Value, got {pair!r}")
        out[key.strip()] = value
    return out
