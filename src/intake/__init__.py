"""Public form intake: validation and persistence."""

from src.intake.persistence import SubmissionStore
from src.intake.validator import (
    SubmissionValidationError,
    validate_contact_payload,
    validate_exit_intent_payload,
    validate_feedback_payload,
)

__all__ = [
    "SubmissionStore",
    "SubmissionValidationError",
    "validate_contact_payload",
    "validate_feedback_payload",
    "validate_exit_intent_payload",
]
