from pathlib import Path


class DataDirectoryError(Exception):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot prepare data directory '{path}': {reason}")
