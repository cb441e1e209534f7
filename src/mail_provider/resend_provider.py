"""Resend transactional email API provider (async, httpx)."""

import httpx

from src.config import FROM_EMAIL, RESEND_API_URL
from src.models.email import DeliveryResult, OutgoingEmail, ProviderStatus
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.mail_provider.resend")


def _error_message(response: httpx.Response) -> str:
    """Provider's JSON `message` when present, else a status-based fallback."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"Resend API error: {response.status_code}"


class ResendMailProvider:
    """One POST /emails per send. No retries; httpx default timeout.

    Pass `client` to share a connection pool (or a MockTransport-backed client in tests).
    """

    mode = "resend"

    def __init__(
        self,
        api_key: str,
        from_address: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ValueError("ResendMailProvider requires an API key")
        self._api_key = api_key
        self.from_address = from_address or FROM_EMAIL
        self.base_url = (base_url or RESEND_API_URL).rstrip("/")
        self._client = client
        logger.info("mail_provider.init", mode=self.mode, base_url=self.base_url)

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._client is not None:
            return await self._client.request(method, url, headers=self._headers, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.request(method, url, headers=self._headers, **kwargs)

    async def send(self, email: OutgoingEmail) -> DeliveryResult:
        payload = {
            "from": email.from_address or self.from_address,
            "to": email.recipients,
            "subject": email.subject,
            "html": email.html,
        }
        try:
            response = await self._request("POST", "/emails", json=payload)
        except httpx.HTTPError as e:
            logger.error("delivery.resend.transport_error", to=email.to, error=str(e) or type(e).__name__)
            return DeliveryResult.failed(str(e) or type(e).__name__)

        if not response.is_success:
            error = _error_message(response)
            logger.error(
                "delivery.resend.failed",
                to=email.to,
                status_code=response.status_code,
                error=error,
            )
            return DeliveryResult.failed(error)

        try:
            payload = response.json()
        except ValueError:
            payload = None
        message_id = payload.get("id") if isinstance(payload, dict) else None
        if not message_id:
            logger.error("delivery.resend.missing_id", to=email.to, status_code=response.status_code)
            return DeliveryResult.failed("Resend API response did not include an email id")

        logger.info("delivery.resend.sent", to=email.to, message_id=message_id)
        return DeliveryResult.sent(message_id)

    async def verify(self) -> ProviderStatus:
        """GET /domains as a cheap authenticated call."""
        try:
            response = await self._request("GET", "/domains")
        except httpx.HTTPError as e:
            logger.warning("delivery.resend.verify_failed", error=str(e) or type(e).__name__)
            return ProviderStatus(status="error", message=f"Email service connection failed: {e}")
        if response.is_success:
            return ProviderStatus(status="ready", message="Email service connected")
        return ProviderStatus(status="error", message=_error_message(response))
