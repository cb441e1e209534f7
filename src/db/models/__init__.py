"""Re-export all ORM models so Base.metadata has all tables."""

from src.db.models.email_template import EmailTemplate
from src.db.models.submission import ContactRecord, FeedbackRecord

__all__ = [
    "ContactRecord",
    "FeedbackRecord",
    "EmailTemplate",
]
