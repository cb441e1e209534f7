"""Exit-intent popup leads, stored and notified like contact submissions."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.intake import SubmissionValidationError, validate_exit_intent_payload
from src.models.submission import ContactSubmission
from src.templating.branding import BUSINESS_INFO
from src.utils.logger import bind_context, clear_context, get_logger
from src.web.routes.common import (
    client_info,
    error_response,
    read_json,
    service_health,
    validation_response,
)

logger = get_logger("vending_notifications.web.exit_intent")

router = APIRouter(prefix="/api/exit-intent", tags=["exit-intent"])

SUCCESS_MESSAGE = "Thank you for your interest! We'll contact you within 24 hours about your FREE vending machine."


@router.post("")
async def submit_exit_intent(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        form = validate_exit_intent_payload(await read_json(request))
        submission = ContactSubmission.from_exit_intent(form, client_info(request))
        bind_context(submission_id=submission.id)
        logger.info("exit_intent.received", company=submission.company_name, has_phone=bool(submission.phone))

        persisted = await state.store.save(submission)
        result = await state.orchestrator.send_contact_form_emails(submission)
        logger.info("exit_intent.complete", tier=result.tier, persisted=persisted)

        return JSONResponse(
            content={
                "success": True,
                "message": SUCCESS_MESSAGE,
                "submissionId": submission.id,
                "emailStatus": result.email_status(),
            }
        )
    except SubmissionValidationError as e:
        logger.info("exit_intent.invalid", errors=e.errors)
        return validation_response(e, "Please fill in all required fields.")
    except Exception as e:
        logger.exception("exit_intent.error", error=str(e))
        return error_response(
            request, e, f"An error occurred. Please try calling us directly at {BUSINESS_INFO['phone']}."
        )
    finally:
        clear_context()


@router.get("")
async def exit_intent_health(request: Request) -> JSONResponse:
    body, status_code = await service_health(request)
    body["service"] = "exit-intent"
    return JSONResponse(status_code=status_code, content=body)
