"""Read-only view of the active email templates (consumed by the marketing site)."""

import asyncio
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.db.repositories import template_repo
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.web.templates")

router = APIRouter(prefix="/api/marketing/email-templates", tags=["templates"])


@router.get("/active")
async def active_templates(request: Request) -> JSONResponse:
    try:
        rows = await asyncio.to_thread(template_repo.list_active_templates, request.app.state.database)
    except Exception as e:
        logger.exception("templates.active.error", error=str(e))
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to fetch templates"})

    data: dict[str, Any] = {
        row.template_id: {
            "name": row.name,
            "subject": row.subject,
            "body": row.body,
            "variables": list(row.variables or []),
        }
        for row in rows
    }
    return JSONResponse(content={"success": True, "data": data})
