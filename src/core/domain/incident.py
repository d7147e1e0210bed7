from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from core.domain.check_result import CheckResult


class IncidentState(str, Enum):
    HEALTHY = "healthy"
    FIRING = "firing"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Incident:
    service_id: str
    state: IncidentState = IncidentState.HEALTHY

    opened_at: Optional[int] = None
    resolved_at: Optional[int] = None
    last_message: Optional[str] = None
    down_checks: int = 0

    @property
    def is_firing(self) -> bool:
        return self.state is IncidentState.FIRING

    def apply(self, result: CheckResult) -> "Incident":
        if result.is_up:
            if self.state is IncidentState.FIRING:
                return replace(self, state=IncidentState.RESOLVED, resolved_at=result.timestamp)

            return self

        if self.state is IncidentState.FIRING:
            return replace(self, last_message=result.message, down_checks=self.down_checks + 1)

        return Incident(
            service_id=self.service_id,
            state=IncidentState.FIRING,
            opened_at=result.timestamp,
            resolved_at=None,
            last_message=result.message,
            down_checks=1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.service_id,
            "state": self.state.value,
            "openedAt": self.opened_at,
            "resolvedAt": self.resolved_at,
            "lastMessage": self.last_message,
            "downChecks": self.down_checks,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Incident":
        return cls(
            service_id=payload["id"],
            state=IncidentState(payload.get("state", IncidentState.HEALTHY.value)),
            opened_at=payload.get("openedAt"),
            resolved_at=payload.get("resolvedAt"),
            last_message=payload.get("lastMessage"),
            down_checks=int(payload.get("downChecks", 0)),
        )
