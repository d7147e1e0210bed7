from dataclasses import dataclass
from typing import Any, Optional

from core.domain.check_status import CheckStatus


@dataclass(frozen=True)
class CheckResult:
    id: str
    timestamp: int
    status: CheckStatus

    status_code: Optional[int] = None
    response_time: Optional[int] = None
    message: Optional[str] = None

    @property
    def is_up(self) -> bool:
        return self.status is CheckStatus.UP

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "status": self.status.value,
        }

        if self.status_code is not None:
            payload["statusCode"] = self.status_code
        if self.response_time is not None:
            payload["responseTime"] = self.response_time
        if self.message is not None:
            payload["message"] = self.message

        return payload
