"""Hardcoded branded emails: the fallback customer confirmations and the business notifications."""

from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

from src.models.email import RenderedEmail
from src.models.monitor import MonitorReport
from src.models.submission import ContactSubmission, FeedbackSubmission
from src.templating.branding import (
    BRAND_COLORS,
    BUSINESS_INFO,
    category_color,
    category_emoji,
    digits_only,
)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ALERT_SUBJECT = f"🚨 ALERT: Contact Form Monitoring Failed - {BUSINESS_INFO['name']}"


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _date_label(value: str) -> str:
    parsed = _parse_timestamp(value)
    return parsed.strftime("%B %d, %Y") if parsed else value


def _datetime_label(value: str) -> str:
    parsed = _parse_timestamp(value)
    return parsed.strftime("%B %d, %Y %H:%M %Z").strip() if parsed else value


def _nl2br(value: str) -> Markup:
    return Markup("<br>").join(escape(line) for line in (value or "").split("\n"))


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Jinja environment over the bundled templates. Autoescaping is on for every .j2 file."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html", "j2"), default_for_string=True),
        undefined=StrictUndefined,
        trim_blocks=False,
        keep_trailing_newline=True,
    )
    env.filters["digits"] = digits_only
    env.filters["nl2br"] = _nl2br
    env.filters["date_label"] = _date_label
    env.filters["datetime_label"] = _datetime_label
    env.globals["business"] = BUSINESS_INFO
    env.globals["colors"] = BRAND_COLORS
    return env


def _current_year() -> int:
    return datetime.now().year


def year_of(timestamp: Optional[str]) -> int:
    """Year of an ISO-8601 timestamp; the current year when it is missing or unparseable."""
    parsed = _parse_timestamp(timestamp)
    return parsed.year if parsed else _current_year()


def _render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)


def wrap_in_layout(content: str, preheader: Optional[str] = None, year: Optional[int] = None) -> str:
    """Wrap an already-rendered HTML fragment in the branded layout. The fragment is inserted as-is."""
    return _render(
        "layout.html.j2",
        content=Markup(content),
        preheader=preheader,
        cta=None,
        year=year or _current_year(),
    )


def contact_confirmation_subject(submission: ContactSubmission) -> str:
    return f"Thank you for contacting {BUSINESS_INFO['name']}, {submission.first_name}!"


def contact_notification_subject(submission: ContactSubmission) -> str:
    return f"🔔 New Contact: {submission.full_name} from {submission.company_name}"


def feedback_confirmation_subject(submission: FeedbackSubmission) -> str:
    return f"Thank you for your feedback, {submission.first_name}!"


def feedback_notification_subject(submission: FeedbackSubmission) -> str:
    prefix = "🚨 URGENT" if submission.is_urgent else "📝"
    return f"{prefix} {submission.category}: {submission.name}"


def contact_confirmation(submission: ContactSubmission) -> RenderedEmail:
    body = _render(
        "contact_confirmation.html.j2",
        s=submission,
        preheader=contact_confirmation_subject(submission),
        cta={"text": "View Our Vending Machines", "url": f"{BUSINESS_INFO['website']}/vending-machines", "color": None},
        year=year_of(submission.submitted_at),
    )
    return RenderedEmail(subject=contact_confirmation_subject(submission), body=body)


def contact_notification(submission: ContactSubmission) -> RenderedEmail:
    body = _render(
        "contact_notification.html.j2",
        s=submission,
        preheader=None,
        cta=None,
        year=year_of(submission.submitted_at),
    )
    return RenderedEmail(subject=contact_notification_subject(submission), body=body)


def feedback_confirmation(submission: FeedbackSubmission) -> RenderedEmail:
    body = _render(
        "feedback_confirmation.html.j2",
        s=submission,
        emoji=category_emoji(submission.category),
        color=category_color(submission.category),
        preheader=f"Thank you for your {submission.category.lower()}, {submission.name}!",
        cta=None,
        year=year_of(submission.submitted_at),
    )
    return RenderedEmail(subject=feedback_confirmation_subject(submission), body=body)


def feedback_notification(submission: FeedbackSubmission) -> RenderedEmail:
    body = _render(
        "feedback_notification.html.j2",
        s=submission,
        emoji=category_emoji(submission.category),
        color=category_color(submission.category),
        preheader=None,
        cta=None,
        year=year_of(submission.submitted_at),
    )
    return RenderedEmail(subject=feedback_notification_subject(submission), body=body)


def monitor_alert(report: MonitorReport) -> RenderedEmail:
    """Operator alert listing each failed probe with its message and duration."""
    body = _render(
        "monitor_alert.html.j2",
        report=report,
        failed=report.failed_probes,
        status_colors={"pass": "#16a34a", "fail": "#dc2626"},
    )
    return RenderedEmail(subject=ALERT_SUBJECT, body=body)
