"""Persistence gateway: one insert per submission, failures reported as False."""

import asyncio
from typing import Union

from src.db import Database
from src.db.repositories import submission_repo
from src.models.submission import ContactSubmission, FeedbackSubmission
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.persistence")

Submission = Union[ContactSubmission, FeedbackSubmission]


class SubmissionStore:
    """Writes submissions through the repository layer. Never raises from save()."""

    def __init__(self, database: Database):
        self.database = database

    def save_sync(self, submission: Submission) -> bool:
        try:
            if isinstance(submission, FeedbackSubmission):
                submission_repo.insert_feedback(self.database, submission)
                table = "feedback_submissions"
            else:
                submission_repo.insert_contact(self.database, submission)
                table = "contact_submissions"
        except Exception as e:
            logger.error(
                "submission.persist_failed",
                submission_id=submission.id,
                source=submission.source,
                error=str(e),
            )
            return False
        logger.info("submission.persisted", submission_id=submission.id, table=table)
        return True

    async def save(self, submission: Submission) -> bool:
        """Insert the submission row. Returns False (after logging) on any failure."""
        return await asyncio.to_thread(self.save_sync, submission)
