"""Health monitor probe and report models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

ProbeStatus = Literal["pending", "pass", "fail", "warn", "skipped"]


class ProbeResult(BaseModel):
    name: str = Field(exclude=True)
    status: ProbeStatus = "pending"
    message: str = ""
    duration_ms: float = 0


class MonitorReport(BaseModel):
    """One monitor run: probes keyed by name in execution order, plus the overall verdict."""

    timestamp: str
    overall: Literal["pass", "fail"]
    tests: dict[str, ProbeResult]
    alerts_sent: bool = False
    environment: str

    @property
    def failed_probes(self) -> list[ProbeResult]:
        return [t for t in self.tests.values() if t.status in ("fail", "warn")]
