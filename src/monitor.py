"""Synthetic health monitor for the contact form pipeline.

Runs four probes in order (database connection, synthetic write, cleanup, email provider),
computes an overall verdict and, in production, emails one alert when the verdict is fail.
"""

import asyncio
from time import perf_counter
from typing import Awaitable, Callable, Optional

from src.config import ALERT_EMAIL, ALERT_FROM_EMAIL, APP_ENV, PRODUCTION
from src.db import Database
from src.db.repositories import submission_repo
from src.mail_provider import MailProvider
from src.models.email import OutgoingEmail
from src.models.monitor import MonitorReport, ProbeResult
from src.models.submission import new_submission_id, utc_timestamp
from src.templating import static
from src.utils.logger import get_logger
from src.utils.tracing import get_tracer

logger = get_logger("vending_notifications.monitor")

PROBE_DATABASE_CONNECTION = "database_connection"
PROBE_DATABASE_WRITE = "database_write"
PROBE_DATABASE_CLEANUP = "database_cleanup"
PROBE_EMAIL_SERVICE = "email_service"


def _error_text(e: Exception) -> str:
    return str(e) or type(e).__name__


class HealthMonitor:
    def __init__(
        self,
        database: Database,
        provider: MailProvider,
        environment: Optional[str] = None,
        alert_email: Optional[str] = None,
        alert_from: Optional[str] = None,
    ):
        self.database = database
        self.provider = provider
        self.environment = (environment or APP_ENV).lower()
        self.alert_email = alert_email or ALERT_EMAIL
        self.alert_from = alert_from or ALERT_FROM_EMAIL

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    async def _timed(self, name: str, probe: Callable[[], Awaitable[tuple[str, str]]]) -> ProbeResult:
        """Run one probe under a span; exceptions become a `fail` result with the error text."""
        tracer = get_tracer()
        start = perf_counter()
        with tracer.start_as_current_span(f"monitor.{name}") as span:
            try:
                status, message = await probe()
            except Exception as e:
                status, message = "fail", _error_text(e)
                span.record_exception(e)
            span.set_attribute("probe.status", status)
        result = ProbeResult(
            name=name,
            status=status,
            message=message,
            duration_ms=round((perf_counter() - start) * 1000, 2),
        )
        logger.info(
            "monitor.probe.complete",
            probe=name,
            status=result.status,
            message=result.message,
            duration_ms=result.duration_ms,
        )
        return result

    async def _probe_connection(self) -> tuple[str, str]:
        await asyncio.to_thread(self.database.ping)
        return "pass", "Connected successfully"

    async def _probe_write(self, record_id: str) -> tuple[str, str]:
        await asyncio.to_thread(submission_repo.insert_synthetic, self.database, record_id, utc_timestamp())
        return "pass", "Write successful"

    async def _probe_cleanup(self, record_id: str) -> tuple[str, str]:
        removed = await asyncio.to_thread(submission_repo.delete_contact, self.database, record_id)
        if not removed:
            return "fail", f"Test record {record_id} was not found for cleanup"
        return "pass", "Test record cleaned up"

    async def _probe_email(self) -> tuple[str, str]:
        status = await self.provider.verify()
        if status.status == "ready":
            return "pass", status.message
        if status.status == "not_configured":
            return "warn", f"{status.message} (emails will not be delivered)"
        return "fail", status.message

    async def run(self) -> MonitorReport:
        """Run every probe once and alert on failure in production."""
        timestamp = utc_timestamp()
        logger.info("monitor.start", environment=self.environment)

        connection = await self._timed(PROBE_DATABASE_CONNECTION, self._probe_connection)

        if connection.status == "pass":
            record_id = new_submission_id("monitor")
            write = await self._timed(PROBE_DATABASE_WRITE, lambda: self._probe_write(record_id))
            if write.status == "pass":
                cleanup = await self._timed(PROBE_DATABASE_CLEANUP, lambda: self._probe_cleanup(record_id))
            else:
                cleanup = ProbeResult(name=PROBE_DATABASE_CLEANUP, status="skipped", message="No test record to clean up")
        else:
            write = ProbeResult(name=PROBE_DATABASE_WRITE, status="skipped", message="Skipped due to connection failure")
            cleanup = ProbeResult(
                name=PROBE_DATABASE_CLEANUP, status="skipped", message="Skipped due to connection failure"
            )

        email = await self._timed(PROBE_EMAIL_SERVICE, self._probe_email)

        failed = (
            connection.status == "fail"
            or write.status == "fail"
            or email.status == "fail"
            or (email.status == "warn" and self.is_production)
        )
        report = MonitorReport(
            timestamp=timestamp,
            overall="fail" if failed else "pass",
            tests={probe.name: probe for probe in (connection, write, cleanup, email)},
            environment=self.environment,
        )

        if failed and self.is_production:
            report.alerts_sent = await self.send_alert(report)

        log_method = logger.error if failed else logger.info
        log_method(
            "monitor.complete",
            overall=report.overall,
            alerts_sent=report.alerts_sent,
            statuses={name: t.status for name, t in report.tests.items()},
        )
        return report

    async def send_alert(self, report: MonitorReport) -> bool:
        """Email the failure report straight through the provider. Returns the send outcome."""
        if not self.alert_email:
            logger.warning("monitor.alert.no_recipient")
            return False
        rendered = static.monitor_alert(report)
        try:
            result = await self.provider.send(
                OutgoingEmail(
                    to=self.alert_email,
                    subject=rendered.subject,
                    html=rendered.body,
                    from_address=self.alert_from,
                )
            )
        except Exception as e:
            logger.error("monitor.alert.failed", error=_error_text(e))
            return False
        if not result.success:
            logger.error("monitor.alert.failed", error=result.error)
            return False
        logger.warning("monitor.alert.sent", to=self.alert_email, message_id=result.message_id)
        return True
