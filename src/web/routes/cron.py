"""Scheduled synthetic monitoring endpoint (called by an external scheduler every 6 hours)."""

import hmac

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.config import PRODUCTION
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.web.cron")

router = APIRouter(prefix="/api/cron", tags=["cron"])


def is_authorized(authorization: str | None, secret: str, environment: str) -> bool:
    """Production requires `Bearer <secret>`; an unset secret rejects every call."""
    if environment != PRODUCTION:
        return True
    if not secret:
        return False
    return hmac.compare_digest(authorization or "", f"Bearer {secret}")


@router.get("/contact-form-monitor")
async def contact_form_monitor(request: Request) -> JSONResponse:
    state = request.app.state
    if not is_authorized(request.headers.get("authorization"), state.cron_secret, state.environment):
        logger.error("monitor.unauthorized", client=request.client.host if request.client else None)
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    report = await state.monitor.run()
    return JSONResponse(
        status_code=500 if report.overall == "fail" else 200,
        content=report.model_dump(),
    )
