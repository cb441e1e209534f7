"""Dynamic email templates: database lookup, [Key] substitution, static fallback."""

import asyncio
import html
import re
from typing import Callable, Iterable, Mapping, Optional

from src.db import Database
from src.db.repositories import template_repo
from src.models.email import RenderedEmail, TemplateResolution
from src.templating.static import wrap_in_layout, year_of
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.templating")


def substitute(text: str, variables: Mapping[str, object], escape: bool, trusted: Iterable[str] = ()) -> str:
    """Replace every literal `[Key]` with its value. Unknown placeholders are left untouched."""
    if not text or not variables:
        return text or ""
    trusted = set(trusted)
    values: dict[str, str] = {}
    for key, value in variables.items():
        rendered = "" if value is None else str(value)
        if escape and key not in trusted:
            rendered = html.escape(rendered, quote=True)
        values[f"[{key}]"] = rendered
    # Single pass so substituted values are never re-scanned for placeholders.
    pattern = re.compile("|".join(re.escape(token) for token in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda m: values[m.group(0)], text)


class TemplateRenderer:
    """Renders admin-editable templates stored in the database.

    Lookups run in a worker thread since the repository layer is synchronous.
    Any failure (missing row, inactive row, unreachable database) yields None so the
    caller can fall back to a static template.

    Body values are HTML-escaped. `trusted` names keys whose values are already safe
    HTML and are inserted raw; the form pipelines pass none. `submitted_at` sets the
    layout footer year so the same submission always renders the same bytes.
    """

    def __init__(self, database: Database, wrap_layout: bool = True):
        self.database = database
        self.wrap_layout = wrap_layout

    def render_sync(
        self,
        template_id: str,
        variables: Mapping[str, object],
        trusted: Iterable[str] = (),
        submitted_at: Optional[str] = None,
    ) -> Optional[RenderedEmail]:
        try:
            row = template_repo.get_active(self.database, template_id)
        except Exception as e:
            logger.warning("template.lookup_failed", template_id=template_id, error=str(e))
            return None
        if row is None:
            logger.info("template.not_found", template_id=template_id)
            return None

        try:
            template_repo.increment_usage(self.database, template_id)
        except Exception as e:
            logger.warning("template.usage_increment_failed", template_id=template_id, error=str(e))

        subject = substitute(row.subject, variables, escape=False)
        body = substitute(row.body, variables, escape=True, trusted=trusted)
        if self.wrap_layout:
            body = wrap_in_layout(body, preheader=subject, year=year_of(submitted_at))
        logger.debug("template.rendered", template_id=template_id, variable_count=len(variables))
        return RenderedEmail(subject=subject, body=body)

    async def render(
        self,
        template_id: str,
        variables: Mapping[str, object],
        trusted: Iterable[str] = (),
        submitted_at: Optional[str] = None,
    ) -> Optional[RenderedEmail]:
        """Render the active template for template_id, or None when there is none."""
        return await asyncio.to_thread(
            self.render_sync, template_id, dict(variables), tuple(trusted), submitted_at
        )

    async def resolve(
        self,
        template_id: str,
        variables: Mapping[str, object],
        fallback: Callable[[], RenderedEmail],
        trusted: Iterable[str] = (),
        submitted_at: Optional[str] = None,
    ) -> TemplateResolution:
        """Dynamic template when available, otherwise the static fallback. Tagged with its source."""
        rendered = await self.render(template_id, variables, trusted=trusted, submitted_at=submitted_at)
        if rendered is not None:
            return TemplateResolution(source="dynamic", subject=rendered.subject, body=rendered.body)
        static = fallback()
        logger.info("template.static_fallback", template_id=template_id)
        return TemplateResolution(source="static", subject=static.subject, body=static.body)
