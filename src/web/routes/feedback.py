"""Feedback form: POST submits, GET reports health plus the accepted categories."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.intake import SubmissionValidationError, validate_feedback_payload
from src.models.submission import FEEDBACK_CATEGORIES, FeedbackSubmission
from src.utils.logger import bind_context, clear_context, get_logger
from src.web.routes.common import (
    client_info,
    error_response,
    read_json,
    service_health,
    validation_response,
)

logger = get_logger("vending_notifications.web.feedback")

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


def feedback_message(tier: str, category: str, is_urgent: bool) -> str:
    noun = category.lower()
    if tier == "delivered":
        follow_up = "prioritize your feedback" if is_urgent else "respond within 24-48 hours"
        return f"Thank you for your {noun}! We've sent a confirmation email and will {follow_up}."
    if tier == "partial":
        follow_up = "prioritize your feedback" if is_urgent else "respond within 24-48 hours"
        return f"Thank you for your {noun}! We will {follow_up}."
    follow_up = "prioritize it" if is_urgent else "respond within 24-48 hours"
    return f"Thank you for your {noun}! We have received your feedback and will {follow_up}."


@router.post("")
async def submit_feedback(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        form = validate_feedback_payload(await read_json(request))
        submission = FeedbackSubmission.from_form(form, client_info(request))
        bind_context(submission_id=submission.id)
        logger.info("feedback.received", category=submission.category, urgent=submission.is_urgent)

        persisted = await state.store.save(submission)
        result = await state.orchestrator.send_feedback_form_emails(submission)
        logger.info("feedback.complete", tier=result.tier, persisted=persisted)

        return JSONResponse(
            content={
                "success": True,
                "message": feedback_message(result.tier, submission.category, submission.is_urgent),
                "submissionId": submission.id,
                "feedbackId": submission.id,
                "category": submission.category,
                "isUrgent": submission.is_urgent,
                "emailStatus": result.email_status(),
            }
        )
    except SubmissionValidationError as e:
        logger.info("feedback.invalid", errors=e.errors)
        return validation_response(e, "Please check your feedback form data.")
    except Exception as e:
        logger.exception("feedback.error", error=str(e))
        return error_response(request, e, "An error occurred while submitting your feedback. Please try again.")
    finally:
        clear_context()


@router.get("")
async def feedback_health(request: Request) -> JSONResponse:
    body, status_code = await service_health(request)
    body["service"] = "feedback"
    body["categories"] = list(FEEDBACK_CATEGORIES)
    return JSONResponse(status_code=status_code, content=body)
