"""Email template repository: active lookups, usage counting, admin create/update/delete."""

import re
from typing import Any, Optional

from sqlalchemy import select, update

from src.db import Database
from src.db.models.email_template import EmailTemplate

PLACEHOLDER_RE = re.compile(r"\[([A-Za-z0-9_]+)\]")

_EDITABLE_FIELDS = ("name", "description", "category", "subject", "body", "is_active", "is_default")


class TemplateProtectedError(ValueError):
    """Raised when deleting a template flagged as a default."""


class TemplateNotFoundError(LookupError):
    """Raised when a template_id does not exist."""


def extract_variables(subject: str, body: str) -> list[str]:
    """Placeholder names in subject then body, in order of first appearance, without duplicates."""
    seen: list[str] = []
    for text in (subject or "", body or ""):
        for name in PLACEHOLDER_RE.findall(text):
            if name not in seen:
                seen.append(name)
    return seen


def get_active(db: Database, template_id: str) -> Optional[EmailTemplate]:
    """Return the active template row for template_id, detached from the session, or None."""
    with db.session() as session:
        row = session.scalar(
            select(EmailTemplate)
            .where(EmailTemplate.template_id == template_id)
            .where(EmailTemplate.is_active.is_(True))
            .limit(1)
        )
        if row is not None:
            session.expunge(row)
        return row


def get(db: Database, template_id: str) -> Optional[EmailTemplate]:
    with db.session() as session:
        row = session.scalar(select(EmailTemplate).where(EmailTemplate.template_id == template_id))
        if row is not None:
            session.expunge(row)
        return row


def list_active_templates(db: Database) -> list[EmailTemplate]:
    with db.session() as session:
        rows = list(
            session.scalars(
                select(EmailTemplate).where(EmailTemplate.is_active.is_(True)).order_by(EmailTemplate.template_id)
            )
        )
        for row in rows:
            session.expunge(row)
        return rows


def increment_usage(db: Database, template_id: str) -> None:
    with db.session() as session:
        session.execute(
            update(EmailTemplate)
            .where(EmailTemplate.template_id == template_id)
            .values(usage_count=EmailTemplate.usage_count + 1)
        )


def create_template(
    db: Database,
    template_id: str,
    name: str,
    subject: str,
    body: str,
    description: Optional[str] = None,
    category: str = "transactional",
    is_active: bool = True,
    is_default: bool = False,
) -> EmailTemplate:
    """Insert a template; variables are derived from subject and body."""
    with db.session() as session:
        row = EmailTemplate(
            template_id=template_id,
            name=name,
            description=description,
            category=category,
            subject=subject,
            body=body,
            variables=extract_variables(subject, body),
            is_active=is_active,
            is_default=is_default,
        )
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def update_template(db: Database, template_id: str, **changes: Any) -> EmailTemplate:
    """Apply changes to an existing template. Recomputes variables when subject or body change."""
    unknown = set(changes) - set(_EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown template fields: {', '.join(sorted(unknown))}")
    with db.session() as session:
        row = session.scalar(select(EmailTemplate).where(EmailTemplate.template_id == template_id))
        if row is None:
            raise TemplateNotFoundError(template_id)
        for key, value in changes.items():
            setattr(row, key, value)
        if "subject" in changes or "body" in changes:
            row.variables = extract_variables(row.subject, row.body)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def delete_template(db: Database, template_id: str) -> None:
    """Delete a template. Default templates cannot be deleted."""
    with db.session() as session:
        row = session.scalar(select(EmailTemplate).where(EmailTemplate.template_id == template_id))
        if row is None:
            raise TemplateNotFoundError(template_id)
        if row.is_default:
            raise TemplateProtectedError(f"Cannot delete default template '{template_id}'")
        session.delete(row)
