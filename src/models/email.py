"""Outgoing email, delivery and notification result models."""

from typing import Literal, Optional

from pydantic import BaseModel, model_validator


class OutgoingEmail(BaseModel):
    """One email handed to a mail provider. `to` may be a comma-separated list."""

    to: str
    subject: str
    html: str
    from_address: Optional[str] = None

    @property
    def recipients(self) -> list[str]:
        return [addr.strip() for addr in self.to.split(",") if addr.strip()]


class DeliveryResult(BaseModel):
    """Outcome of a single send: success iff message_id is set and error is not."""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "DeliveryResult":
        if self.success and (not self.message_id or self.error):
            raise ValueError("successful delivery needs a message_id and no error")
        if not self.success and (self.message_id or not self.error):
            raise ValueError("failed delivery needs an error and no message_id")
        return self

    @classmethod
    def sent(cls, message_id: str) -> "DeliveryResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: str) -> "DeliveryResult":
        return cls(success=False, error=error or "Unknown error")


class ProviderStatus(BaseModel):
    """Readiness of the configured mail provider."""

    status: Literal["ready", "not_configured", "error"]
    message: str


class RenderedEmail(BaseModel):
    subject: str
    body: str


class TemplateResolution(BaseModel):
    """Subject/body plus which path produced them."""

    source: Literal["dynamic", "static"]
    subject: str
    body: str


NotificationTier = Literal["delivered", "partial", "unconfirmed"]


class NotificationResult(BaseModel):
    """Per-email outcomes of one submission's customer + business notifications."""

    customer_result: DeliveryResult
    business_result: DeliveryResult
    customer_source: Optional[Literal["dynamic", "static"]] = None

    @property
    def tier(self) -> NotificationTier:
        if not self.business_result.success:
            return "unconfirmed"
        if not self.customer_result.success:
            return "partial"
        return "delivered"

    def email_status(self) -> dict[str, str]:
        """Response-shaped `emailStatus` block."""
        return {
            "customerConfirmation": "sent" if self.customer_result.success else "failed",
            "businessNotification": "sent" if self.business_result.success else "failed",
        }
