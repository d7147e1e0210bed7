from pathlib import Path


class SummaryCorruptedError(Exception):
    def __init__(self, service_id: str, path: Path):
        self.service_id = service_id
        self.path = path
        super().__init__(f"Summary for service '{service_id}' at '{path}' is not a valid summary document")
