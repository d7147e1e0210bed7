from dataclasses import dataclass
from typing import Any, Optional

from core.domain.check_result import CheckResult
from core.domain.check_status import CheckStatus


@dataclass(frozen=True)
class Summary:
    """Rolling statistics for one service across every check ever folded in.

    ``uptime_percentage`` is derived from the two counters on access and is
    never stored independently of them.
    """

    total_checks: int = 0
    up_checks: int = 0
    avg_response_time: float = 0.0
    last_status: CheckStatus = CheckStatus.UNKNOWN
    last_checked: Optional[int] = None

    @property
    def uptime_percentage(self) -> float:
        if self.total_checks == 0:
            return 0.0

        return (self.up_checks / self.total_checks) * 100

    def fold(self, result: CheckResult) -> "Summary":
        total_checks = self.total_checks + 1
        up_checks = self.up_checks + (1 if result.is_up else 0)

        # Results without a response time leave the average untouched, but the
        # next timed result still divides by the full check count.
        avg_response_time = self.avg_response_time
        if result.response_time is not None:
            avg_response_time = (self.avg_response_time * self.total_checks + result.response_time) / total_checks

        return Summary(
            total_checks=total_checks,
            up_checks=up_checks,
            avg_response_time=avg_response_time,
            last_status=result.status,
            last_checked=result.timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "uptimePercentage": self.uptime_percentage,
            "totalChecks": self.total_checks,
            "upChecks": self.up_checks,
            "avgResponseTime": self.avg_response_time,
            "lastStatus": self.last_status.value,
        }

        if self.last_checked is not None:
            payload["lastChecked"] = self.last_checked

        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Summary":
        total_checks = int(payload["totalChecks"])
        up_checks = int(payload["upChecks"])

        if total_checks < 0 or up_checks < 0 or up_checks > total_checks:
            raise ValueError(f"Inconsistent counters: upChecks={up_checks}, totalChecks={total_checks}")

        last_checked = payload.get("lastChecked")

        return cls(
            total_checks=total_checks,
            up_checks=up_checks,
            avg_response_time=float(payload.get("avgResponseTime", 0.0)),
            last_status=CheckStatus(payload.get("lastStatus", CheckStatus.UNKNOWN.value)),
            last_checked=int(last_checked) if last_checked is not None else None,
        )
