"""Mail provider protocol: send one email, report readiness."""

from typing import Protocol

from src.models.email import DeliveryResult, OutgoingEmail, ProviderStatus


class MailProvider(Protocol):
    """Delivery adapter interface. Implementations never raise from send(); failures are results."""

    mode: str

    async def send(self, email: OutgoingEmail) -> DeliveryResult:
        """Send one email. Returns success with a provider message id, or failure with an error."""
        ...

    async def verify(self) -> ProviderStatus:
        """Report whether the provider is configured and reachable."""
        ...
