"""Non-delivering providers: development console logging and the unconfigured fallback."""

import time

from src.config import FROM_EMAIL
from src.models.email import DeliveryResult, OutgoingEmail, ProviderStatus
from src.utils.body_sanitizer import text_preview
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.mail_provider")


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class ConsoleMailProvider:
    """Development mode: logs the email with a plain-text preview instead of sending it."""

    mode = "development"

    def __init__(self, from_address: str | None = None, preview_chars: int = 300):
        self.from_address = from_address or FROM_EMAIL
        self.preview_chars = preview_chars
        self.sent: list[OutgoingEmail] = []
        logger.info("mail_provider.init", mode=self.mode)

    async def send(self, email: OutgoingEmail) -> DeliveryResult:
        self.sent.append(email)
        message_id = f"dev-{_epoch_ms()}"
        logger.info(
            "delivery.console.sent",
            to=email.to,
            subject=email.subject,
            from_address=email.from_address or self.from_address,
            preview=text_preview(email.html, self.preview_chars),
            message_id=message_id,
        )
        return DeliveryResult.sent(message_id)

    async def verify(self) -> ProviderStatus:
        return ProviderStatus(status="ready", message="Development mode: emails are logged to the console")


class UnconfiguredMailProvider:
    """Production without an API key: nothing is delivered, but sends report success.

    Submissions are still persisted, so the business can follow up from the database.
    """

    mode = "fallback"

    def __init__(self):
        logger.warning("mail_provider.init", mode=self.mode, reason="RESEND_API_KEY not configured")

    async def send(self, email: OutgoingEmail) -> DeliveryResult:
        message_id = f"fallback-{_epoch_ms()}"
        logger.warning(
            "delivery.fallback.not_sent",
            to=email.to,
            subject=email.subject,
            message_id=message_id,
        )
        return DeliveryResult.sent(message_id)

    async def verify(self) -> ProviderStatus:
        return ProviderStatus(status="not_configured", message="Email service not configured (RESEND_API_KEY missing)")
