"""Contact form: POST submits, GET reports pipeline health."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.intake import SubmissionValidationError, validate_contact_payload
from src.models.submission import ContactSubmission
from src.utils.logger import bind_context, clear_context, get_logger
from src.web.routes.common import (
    client_info,
    error_response,
    read_json,
    service_health,
    validation_response,
)

logger = get_logger("vending_notifications.web.contact")

router = APIRouter(prefix="/api/contact", tags=["contact"])

TIER_MESSAGES = {
    "delivered": "Thank you for your inquiry! We've sent a confirmation email and will respond within 24 hours.",
    "partial": "Thank you for your inquiry! We will respond within 24 hours.",
    "unconfirmed": "Thank you for your inquiry! We have received your submission and will respond within 24 hours.",
}


@router.post("")
async def submit_contact(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        form = validate_contact_payload(await read_json(request))
        submission = ContactSubmission.from_form(form, client_info(request))
        bind_context(submission_id=submission.id)
        logger.info("contact.received", company=submission.company_name, source=submission.source)

        persisted = await state.store.save(submission)
        result = await state.orchestrator.send_contact_form_emails(submission)
        logger.info("contact.complete", tier=result.tier, persisted=persisted)

        return JSONResponse(
            content={
                "success": True,
                "message": TIER_MESSAGES[result.tier],
                "submissionId": submission.id,
                "emailStatus": result.email_status(),
            }
        )
    except SubmissionValidationError as e:
        logger.info("contact.invalid", errors=e.errors)
        return validation_response(e, "Please check your form data.")
    except Exception as e:
        logger.exception("contact.error", error=str(e))
        return error_response(request, e, "An error occurred while processing your request. Please try again.")
    finally:
        clear_context()


@router.get("")
async def contact_health(request: Request) -> JSONResponse:
    body, status_code = await service_health(request)
    body["service"] = "contact"
    return JSONResponse(status_code=status_code, content=body)
