"""ORM models for inbound form submissions (contact/exit-intent and feedback)."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, TimestampMixin

STATUS_NEW = "new"
STATUS_ARCHIVED = "archived"


class ContactRecord(Base, TimestampMixin):
    """One row per contact or exit-intent submission. Keyed by the server-generated submission id."""

    __tablename__ = "contact_submissions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    company_name: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")

    source: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    ip_address: Mapped[str] = mapped_column(String(128), nullable=False, default="unknown")
    user_agent: Mapped[str] = mapped_column(String(1024), nullable=False, default="unknown")
    submitted_at: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_NEW, index=True)


class FeedbackRecord(Base, TimestampMixin):
    """One row per customer feedback submission."""

    __tablename__ = "feedback_submissions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    location_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    contact_consent: Mapped[bool] = mapped_column(nullable=False, default=False)

    source: Mapped[str] = mapped_column(String(64), nullable=False)
    ip_address: Mapped[str] = mapped_column(String(128), nullable=False, default="unknown")
    user_agent: Mapped[str] = mapped_column(String(1024), nullable=False, default="unknown")
    submitted_at: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_NEW, index=True)
