"""Submission validation: raw JSON payloads to typed forms with field-level messages."""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.models.submission import ContactForm, ExitIntentForm, FeedbackForm

FormT = TypeVar("FormT", bound=BaseModel)

# (field, pydantic error type) -> message; "*" matches any error type for that field.
_MESSAGES: dict[tuple[str, str], str] = {
    ("firstName", "missing"): "First name is required",
    ("firstName", "string_too_short"): "First name is required",
    ("firstName", "string_too_long"): "First name is too long",
    ("lastName", "missing"): "Last name is required",
    ("lastName", "string_too_short"): "Last name is required",
    ("lastName", "string_too_long"): "Last name is too long",
    ("email", "*"): "Invalid email address",
    ("companyName", "missing"): "Company name is required",
    ("companyName", "string_too_short"): "Company name is required",
    ("companyName", "string_too_long"): "Company name is too long",
    ("name", "missing"): "Name is required",
    ("name", "string_too_short"): "Name is required",
    ("name", "string_too_long"): "Name is too long",
    ("category", "*"): "Invalid category",
    ("locationName", "string_too_long"): "Location name is too long",
    ("message", "missing"): "Message must be at least 10 characters",
    ("message", "string_too_short"): "Message must be at least 10 characters",
    ("message", "string_too_long"): "Message is too long (max 2000 characters)",
    ("contactConsent", "*"): "You must consent to be contacted",
    ("pageUrl", "*"): "Invalid page URL",
}


class SubmissionValidationError(ValueError):
    """Payload failed validation. `errors` lists every violation as {field, message}."""

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors) or "Invalid submission")


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if not isinstance(p, int)]
    return ".".join(parts) if parts else "body"


def _message_for(field: str, error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    return (
        _MESSAGES.get((field, error_type))
        or _MESSAGES.get((field, "*"))
        or error.get("msg")
        or "Invalid value"
    )


def translate_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Pydantic errors to [{field, message}], one entry per field in the order reported."""
    out: list[dict[str, str]] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = _field_name(tuple(error.get("loc", ())))
        if field in seen:
            continue
        seen.add(field)
        out.append({"field": field, "message": _message_for(field, error)})
    return out


def _validate(model: Type[FormT], payload: Any) -> FormT:
    if not isinstance(payload, dict):
        raise SubmissionValidationError([{"field": "body", "message": "Request body must be a JSON object"}])
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise SubmissionValidationError(translate_errors(e)) from e


def validate_contact_payload(payload: Any) -> ContactForm:
    return _validate(ContactForm, payload)


def validate_feedback_payload(payload: Any) -> FeedbackForm:
    return _validate(FeedbackForm, payload)


def validate_exit_intent_payload(payload: Any) -> ExitIntentForm:
    return _validate(ExitIntentForm, payload)
