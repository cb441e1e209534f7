"""Tests for submission validation: field messages, defaults, consent and category rules."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.intake.validator import (
    SubmissionValidationError,
    validate_contact_payload,
    validate_exit_intent_payload,
    validate_feedback_payload,
)
from src.models.submission import ClientInfo, ContactSubmission, FeedbackSubmission

VALID_FEEDBACK = {
    "name": "Maria Lopez",
    "email": "maria@example.com",
    "category": "Suggestion",
    "message": "Please stock more sparkling water.",
    "contactConsent": True,
}


def _fields(exc: SubmissionValidationError) -> dict[str, str]:
    return {e["field"]: e["message"] for e in exc.errors}


class TestContactValidation(unittest.TestCase):
    def test_minimal_payload_defaults(self):
        form = validate_contact_payload(
            {"firstName": "John", "lastName": "Smith", "email": "john@x.com", "companyName": "Acme"}
        )
        self.assertEqual(form.first_name, "John")
        self.assertEqual(form.message, "")
        self.assertIsNone(form.phone)

    def test_reports_every_violation(self):
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_contact_payload({"firstName": "", "lastName": "x" * 51, "email": "nope", "companyName": ""})
        fields = _fields(ctx.exception)
        self.assertEqual(fields["firstName"], "First name is required")
        self.assertEqual(fields["lastName"], "Last name is too long")
        self.assertEqual(fields["email"], "Invalid email address")
        self.assertEqual(fields["companyName"], "Company name is required")

    def test_whitespace_only_name_is_required_error(self):
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_contact_payload({"firstName": "   ", "lastName": "S", "email": "a@b.co", "companyName": "C"})
        self.assertEqual(_fields(ctx.exception)["firstName"], "First name is required")

    def test_trims_fields_but_not_message(self):
        form = validate_contact_payload(
            {
                "firstName": " John ",
                "lastName": "Smith",
                "email": "john@x.com",
                "companyName": " Acme ",
                "phone": "   ",
                "message": "  hello  ",
            }
        )
        self.assertEqual(form.first_name, "John")
        self.assertEqual(form.company_name, "Acme")
        self.assertIsNone(form.phone)
        self.assertEqual(form.message, "  hello  ")

    def test_non_object_payload(self):
        for payload in (None, [], "text", 42):
            with self.assertRaises(SubmissionValidationError) as ctx:
                validate_contact_payload(payload)
            self.assertEqual([e["field"] for e in ctx.exception.errors], ["body"])

    def test_submission_metadata(self):
        form = validate_contact_payload(
            {"firstName": "John", "lastName": "Smith", "email": "john@x.com", "companyName": "Acme"}
        )
        sub = ContactSubmission.from_form(form, ClientInfo(ip_address="1.2.3.4", user_agent="ua"))
        self.assertTrue(sub.id.startswith("contact_"))
        self.assertEqual(sub.source, "website_contact_form")
        self.assertEqual(sub.ip_address, "1.2.3.4")
        self.assertIn("T", sub.submitted_at)
        other = ContactSubmission.from_form(form)
        self.assertNotEqual(sub.id, other.id)
        self.assertEqual(other.user_agent, "unknown")


class TestFeedbackValidation(unittest.TestCase):
    def test_valid(self):
        form = validate_feedback_payload(VALID_FEEDBACK)
        self.assertEqual(form.category, "Suggestion")
        self.assertTrue(form.contact_consent)
        self.assertIsNone(form.location_name)

    def test_consent_must_be_true(self):
        for consent in (False, "true", 1, None):
            payload = dict(VALID_FEEDBACK, contactConsent=consent)
            with self.assertRaises(SubmissionValidationError) as ctx:
                validate_feedback_payload(payload)
            self.assertEqual(_fields(ctx.exception)["contactConsent"], "You must consent to be contacted")

    def test_consent_absent(self):
        payload = {k: v for k, v in VALID_FEEDBACK.items() if k != "contactConsent"}
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_feedback_payload(payload)
        self.assertIn("contactConsent", _fields(ctx.exception))

    def test_unknown_category_rejected(self):
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_feedback_payload(dict(VALID_FEEDBACK, category="Refund"))
        self.assertEqual(_fields(ctx.exception)["category"], "Invalid category")

    def test_category_is_case_sensitive(self):
        with self.assertRaises(SubmissionValidationError):
            validate_feedback_payload(dict(VALID_FEEDBACK, category="question"))

    def test_message_length_bounds(self):
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_feedback_payload(dict(VALID_FEEDBACK, message="short"))
        self.assertEqual(_fields(ctx.exception)["message"], "Message must be at least 10 characters")
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_feedback_payload(dict(VALID_FEEDBACK, message="x" * 2001))
        self.assertEqual(_fields(ctx.exception)["message"], "Message is too long (max 2000 characters)")
        validate_feedback_payload(dict(VALID_FEEDBACK, message="x" * 10))
        validate_feedback_payload(dict(VALID_FEEDBACK, message="x" * 2000))

    def test_message_length_counts_surrounding_whitespace(self):
        form = validate_feedback_payload(dict(VALID_FEEDBACK, message="   hi there   "))
        self.assertEqual(form.message, "   hi there   ")
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_feedback_payload(dict(VALID_FEEDBACK, message="x" * 2000 + "   "))
        self.assertEqual(_fields(ctx.exception)["message"], "Message is too long (max 2000 characters)")
        form = validate_feedback_payload(dict(VALID_FEEDBACK, message="x" * 1997 + "   "))
        self.assertEqual(len(form.message), 2000)

    def test_name_email_and_location_are_trimmed(self):
        form = validate_feedback_payload(
            dict(VALID_FEEDBACK, name="  Maria  ", email=" maria@example.com ", locationName="   ")
        )
        self.assertEqual(form.name, "Maria")
        self.assertEqual(str(form.email), "maria@example.com")
        self.assertIsNone(form.location_name)

    def test_urgency_and_first_name(self):
        form = validate_feedback_payload(dict(VALID_FEEDBACK, category="Technical Issue"))
        sub = FeedbackSubmission.from_form(form)
        self.assertTrue(sub.is_urgent)
        self.assertEqual(sub.first_name, "Maria")
        self.assertTrue(sub.id.startswith("feedback_"))
        self.assertEqual(sub.source, "website_feedback_form")


class TestExitIntentValidation(unittest.TestCase):
    def test_page_url_and_message(self):
        form = validate_exit_intent_payload(
            {
                "firstName": "Ann",
                "lastName": "Lee",
                "email": "ann@example.com",
                "companyName": "Lee Co",
                "pageUrl": "https://www.ampvendingmachines.com/vending-machines",
            }
        )
        sub = ContactSubmission.from_exit_intent(form)
        self.assertEqual(sub.message, "Exit Intent Lead from https://www.ampvendingmachines.com/vending-machines")
        self.assertEqual(sub.source, "exit_intent_popup")
        self.assertTrue(sub.id.startswith("exit_"))

    def test_missing_page_url_defaults_to_website(self):
        form = validate_exit_intent_payload(
            {"firstName": "Ann", "lastName": "Lee", "email": "ann@example.com", "companyName": "Lee Co"}
        )
        self.assertEqual(ContactSubmission.from_exit_intent(form).message, "Exit Intent Lead from website")

    def test_bad_page_url(self):
        with self.assertRaises(SubmissionValidationError) as ctx:
            validate_exit_intent_payload(
                {
                    "firstName": "Ann",
                    "lastName": "Lee",
                    "email": "ann@example.com",
                    "companyName": "Lee Co",
                    "pageUrl": "not a url",
                }
            )
        self.assertEqual(_fields(ctx.exception)["pageUrl"], "Invalid page URL")


if __name__ == "__main__":
    unittest.main()
