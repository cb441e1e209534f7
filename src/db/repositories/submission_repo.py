"""Submission repository: insert contact/feedback rows, synthetic monitor rows, delete by id."""

from typing import Optional

from sqlalchemy import delete, select

from src.db import Database
from src.db.models.submission import STATUS_ARCHIVED, ContactRecord, FeedbackRecord
from src.models.submission import ContactSubmission, FeedbackSubmission

SYNTHETIC_TEST_DATA = {
    "first_name": "SYNTHETIC_TEST",
    "last_name": "DO_NOT_RESPOND",
    "email": "synthetic-test@ampvendingmachines.com",
    "phone": "000-000-0000",
    "company_name": "Automated Monitoring Test",
    "message": "This is an automated synthetic test submission. Please ignore.",
    "source": "synthetic_monitor",
}


def insert_contact(db: Database, submission: ContactSubmission) -> str:
    """Insert one contact_submissions row; returns its id."""
    with db.session() as session:
        row = ContactRecord(
            id=submission.id,
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=submission.email,
            phone=submission.phone,
            company_name=submission.company_name,
            message=submission.message,
            source=submission.source,
            ip_address=submission.ip_address,
            user_agent=submission.user_agent,
            submitted_at=submission.submitted_at,
        )
        session.add(row)
        session.flush()
        return row.id


def insert_feedback(db: Database, submission: FeedbackSubmission) -> str:
    """Insert one feedback_submissions row; returns its id."""
    with db.session() as session:
        row = FeedbackRecord(
            id=submission.id,
            name=submission.name,
            email=submission.email,
            category=submission.category,
            location_name=submission.location_name,
            message=submission.message,
            contact_consent=submission.contact_consent,
            source=submission.source,
            ip_address=submission.ip_address,
            user_agent=submission.user_agent,
            submitted_at=submission.submitted_at,
        )
        session.add(row)
        session.flush()
        return row.id


def insert_synthetic(db: Database, submission_id: str, submitted_at: str) -> str:
    """Insert a clearly marked, already-archived test row used by the health monitor."""
    with db.session() as session:
        row = ContactRecord(
            id=submission_id,
            submitted_at=submitted_at,
            status=STATUS_ARCHIVED,
            ip_address="monitor",
            user_agent="contact-form-monitor",
            **SYNTHETIC_TEST_DATA,
        )
        session.add(row)
        session.flush()
        return row.id


def delete_contact(db: Database, submission_id: str) -> int:
    """Delete a contact_submissions row by id; returns number of rows removed."""
    with db.session() as session:
        result = session.execute(delete(ContactRecord).where(ContactRecord.id == submission_id))
        return result.rowcount or 0


def get_contact(db: Database, submission_id: str) -> Optional[ContactRecord]:
    with db.session() as session:
        row = session.scalar(select(ContactRecord).where(ContactRecord.id == submission_id))
        if row is not None:
            session.expunge(row)
        return row


def get_feedback(db: Database, submission_id: str) -> Optional[FeedbackRecord]:
    with db.session() as session:
        row = session.scalar(select(FeedbackRecord).where(FeedbackRecord.id == submission_id))
        if row is not None:
            session.expunge(row)
        return row
