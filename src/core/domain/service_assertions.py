from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ServiceAssertions:
    status: Optional[tuple[int, ...]] = None
    contains_text: Optional[str] = None

    def check_status_code(self, status_code: int) -> Optional[str]:
        if self.status is not None and status_code not in self.status:
            expected = ", ".join(str(code) for code in self.status)
            return f"Expected status {expected}, got {status_code}"

        return None

    def check_body(self, body: str) -> Optional[str]:
        if self.contains_text and self.contains_text not in body:
            return f"Response does not contain expected text: {self.contains_text}"

        return None
