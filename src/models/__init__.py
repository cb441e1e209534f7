"""Pydantic models for submissions, email delivery and monitoring."""

from src.models.email import (
    DeliveryResult,
    NotificationResult,
    OutgoingEmail,
    ProviderStatus,
    RenderedEmail,
    TemplateResolution,
)
from src.models.monitor import MonitorReport, ProbeResult
from src.models.submission import (
    FEEDBACK_CATEGORIES,
    ClientInfo,
    ContactForm,
    ContactSubmission,
    ExitIntentForm,
    FeedbackForm,
    FeedbackSubmission,
)

__all__ = [
    "OutgoingEmail",
    "DeliveryResult",
    "ProviderStatus",
    "RenderedEmail",
    "TemplateResolution",
    "NotificationResult",
    "ProbeResult",
    "MonitorReport",
    "FEEDBACK_CATEGORIES",
    "ClientInfo",
    "ContactForm",
    "ExitIntentForm",
    "FeedbackForm",
    "ContactSubmission",
    "FeedbackSubmission",
]
