"""Notification orchestrator: customer confirmation + business alert per submission, sent concurrently."""

import asyncio
from time import perf_counter
from typing import Awaitable, Callable, Optional

from opentelemetry.trace import Status, StatusCode

from src.config import FROM_EMAIL, TO_EMAIL
from src.mail_provider import MailProvider
from src.models.email import DeliveryResult, NotificationResult, OutgoingEmail, RenderedEmail, TemplateResolution
from src.models.submission import ContactSubmission, FeedbackSubmission
from src.templating import TemplateRenderer, static
from src.utils.logger import get_logger
from src.utils.tracing import get_tracer

logger = get_logger("vending_notifications.orchestrator")

CONTACT_CONFIRMATION_TEMPLATE = "contact-confirmation"
FEEDBACK_CONFIRMATION_TEMPLATE = "feedback-confirmation"


def contact_template_variables(submission: ContactSubmission) -> dict[str, str]:
    return {
        "FirstName": submission.first_name,
        "LastName": submission.last_name,
        "Company": submission.company_name,
        "Email": submission.email,
        "Phone": submission.phone or "Not provided",
        "Message": submission.message or "No message provided",
    }


def feedback_template_variables(submission: FeedbackSubmission) -> dict[str, str]:
    return {
        "Name": submission.name,
        "FirstName": submission.first_name,
        "Email": submission.email,
        "Category": submission.category,
        "Location": submission.location_name or "Not provided",
        "Message": submission.message,
    }


class NotificationOrchestrator:
    """Renders and dispatches the two emails for a submission.

    The customer email prefers the database template and falls back to the static one.
    The business email always uses the static notification template. Neither send can
    cancel or fail the other; the method never raises.
    """

    def __init__(
        self,
        provider: MailProvider,
        renderer: TemplateRenderer,
        business_email: Optional[str] = None,
        from_address: Optional[str] = None,
    ):
        self.provider = provider
        self.renderer = renderer
        self.business_email = business_email or TO_EMAIL
        self.from_address = from_address or FROM_EMAIL

    async def _send_customer(
        self,
        to: str,
        template_id: str,
        variables: dict[str, str],
        fallback: Callable[[], RenderedEmail],
        resolved: dict[str, TemplateResolution],
        submitted_at: str,
    ) -> DeliveryResult:
        resolution = await self.renderer.resolve(template_id, variables, fallback, submitted_at=submitted_at)
        resolved["customer"] = resolution
        return await self.provider.send(
            OutgoingEmail(to=to, subject=resolution.subject, html=resolution.body, from_address=self.from_address)
        )

    async def _send_business(self, rendered: Callable[[], RenderedEmail]) -> DeliveryResult:
        email = rendered()
        return await self.provider.send(
            OutgoingEmail(to=self.business_email, subject=email.subject, html=email.body, from_address=self.from_address)
        )

    async def _dispatch(
        self,
        kind: str,
        submission_id: str,
        customer: Callable[[dict], Awaitable[DeliveryResult]],
        business: Awaitable[DeliveryResult],
    ) -> NotificationResult:
        tracer = get_tracer()
        start = perf_counter()
        log = logger.bind(submission_id=submission_id, kind=kind, provider=getattr(self.provider, "mode", None))
        resolved: dict[str, TemplateResolution] = {}

        with tracer.start_as_current_span(
            "notify_submission",
            attributes={"submission.id": submission_id, "submission.kind": kind},
        ) as span:
            outcomes = await asyncio.gather(customer(resolved), business, return_exceptions=True)

            results: list[DeliveryResult] = []
            for label, outcome in zip(("customer", "business"), outcomes):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    log.error("notify.send_raised", email=label, error=str(outcome) or type(outcome).__name__)
                    span.record_exception(outcome)
                    results.append(DeliveryResult.failed(str(outcome) or type(outcome).__name__))
                else:
                    results.append(outcome)

            customer_source = resolved["customer"].source if "customer" in resolved else None
            result = NotificationResult(
                customer_result=results[0],
                business_result=results[1],
                customer_source=customer_source,
            )
            span.set_attribute("notify.tier", result.tier)
            if result.tier != "delivered":
                span.set_status(Status(StatusCode.ERROR, result.tier))

        duration_ms = (perf_counter() - start) * 1000
        log_method = log.info if result.tier == "delivered" else log.warning
        log_method(
            "notify.complete",
            tier=result.tier,
            customer=result.customer_result.success,
            business=result.business_result.success,
            customer_source=customer_source,
            customer_error=result.customer_result.error,
            business_error=result.business_result.error,
            duration_ms=round(duration_ms, 2),
        )
        return result

    async def send_contact_form_emails(self, submission: ContactSubmission) -> NotificationResult:
        """Customer confirmation (dynamic `contact-confirmation` or static) and business notification."""

        def customer(resolved: dict) -> Awaitable[DeliveryResult]:
            return self._send_customer(
                submission.email,
                CONTACT_CONFIRMATION_TEMPLATE,
                contact_template_variables(submission),
                lambda: static.contact_confirmation(submission),
                resolved,
                submission.submitted_at,
            )

        return await self._dispatch(
            "contact",
            submission.id,
            customer,
            self._send_business(lambda: static.contact_notification(submission)),
        )

    async def send_feedback_form_emails(self, submission: FeedbackSubmission) -> NotificationResult:
        """Customer confirmation (dynamic `feedback-confirmation` or static) and business notification."""

        def customer(resolved: dict) -> Awaitable[DeliveryResult]:
            return self._send_customer(
                submission.email,
                FEEDBACK_CONFIRMATION_TEMPLATE,
                feedback_template_variables(submission),
                lambda: static.feedback_confirmation(submission),
                resolved,
                submission.submitted_at,
            )

        return await self._dispatch(
            "feedback",
            submission.id,
            customer,
            self._send_business(lambda: static.feedback_notification(submission)),
        )
