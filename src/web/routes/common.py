"""Shared request helpers for the public form routes."""

import asyncio
import json
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from src.config import DEVELOPMENT
from src.intake import SubmissionValidationError
from src.models.submission import ClientInfo
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.web")


def client_info(request: Request) -> ClientInfo:
    """First X-Forwarded-For hop (else "unknown") and the user agent (else "unknown")."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip_address = forwarded.split(",")[0].strip() if forwarded else ""
    user_agent = request.headers.get("user-agent", "").strip()
    return ClientInfo(ip_address=ip_address or "unknown", user_agent=user_agent or "unknown")


async def read_json(request: Request) -> Any:
    """Parse the request body; malformed JSON is a validation failure on `body`."""
    raw = await request.body()
    try:
        return json.loads(raw) if raw else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise SubmissionValidationError([{"field": "body", "message": "Request body must be valid JSON"}])


def validation_response(exc: SubmissionValidationError, message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": message, "errors": exc.errors})


def error_response(request: Request, exc: Exception, message: str) -> JSONResponse:
    """500 body; the exception text is only exposed in development."""
    content: dict[str, Any] = {"success": False, "message": message}
    if request.app.state.environment == DEVELOPMENT:
        content["error"] = str(exc) or type(exc).__name__
    return JSONResponse(status_code=500, content=content)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def service_health(request: Request) -> tuple[dict[str, Any], int]:
    """Email provider and database readiness: healthy, degraded (email not configured) or unhealthy."""
    state = request.app.state

    try:
        provider_status = await state.provider.verify()
        email = {"status": provider_status.status, "message": provider_status.message}
    except Exception as e:
        logger.exception("health.email_check_failed", error=str(e))
        email = {"status": "error", "message": str(e) or type(e).__name__}

    try:
        await asyncio.to_thread(state.database.ping)
        database = {"status": "ready", "message": "Database connected"}
    except Exception as e:
        logger.error("health.database_check_failed", error=str(e))
        database = {"status": "error", "message": str(e) or type(e).__name__}

    if email["status"] == "error" or database["status"] == "error":
        status = "unhealthy"
    elif email["status"] == "not_configured":
        status = "degraded"
    else:
        status = "healthy"

    body = {
        "status": status,
        "timestamp": now_iso(),
        "services": {"email": email, "database": database},
    }
    return body, 500 if status == "unhealthy" else 200
