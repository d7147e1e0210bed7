from pathlib import Path


class MonitorConfigError(Exception):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid monitor configuration '{path}': {reason}")
