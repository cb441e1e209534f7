"""Mail providers: Resend API, development console, unconfigured fallback."""

import httpx

from src.config import APP_ENV, DEVELOPMENT, FROM_EMAIL, RESEND_API_KEY, RESEND_API_URL
from src.mail_provider.console_mock import ConsoleMailProvider, UnconfiguredMailProvider
from src.mail_provider.protocol import MailProvider
from src.mail_provider.resend_provider import ResendMailProvider


def build_provider(
    environment: str | None = None,
    api_key: str | None = None,
    from_address: str | None = None,
    base_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> MailProvider:
    """Pick the provider once from the deployment environment and credentials."""
    environment = (environment if environment is not None else APP_ENV).lower()
    api_key = api_key if api_key is not None else RESEND_API_KEY
    if environment == DEVELOPMENT:
        return ConsoleMailProvider(from_address=from_address or FROM_EMAIL)
    if api_key:
        return ResendMailProvider(
            api_key=api_key,
            from_address=from_address or FROM_EMAIL,
            base_url=base_url or RESEND_API_URL,
            client=client,
        )
    return UnconfiguredMailProvider()


__all__ = [
    "MailProvider",
    "ConsoleMailProvider",
    "UnconfiguredMailProvider",
    "ResendMailProvider",
    "build_provider",
]
