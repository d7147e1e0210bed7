from dataclasses import dataclass


@dataclass(frozen=True)
class MonitorSettings:
    timeout_ms: int = 10_000
    user_agent: str = "py-uptime-monitor"
    retries: int = 0
    retry_backoff_ms: int = 500
    concurrency: int = 10

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1_000
