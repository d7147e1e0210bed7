import asyncio
import json
import os
from functools import lru_cache
from pathlib import Path

from core.domain.check_result import CheckResult
from core.port.result_store import ResultStore
from infra.config.config import get_config


class NdjsonResultStore(ResultStore):
    def __init__(self, checks_dir: Path) -> None:
        self.checks_dir = checks_dir

    def path_for(self, service_id: str) -> Path:
        return self.checks_dir / f"{service_id}.ndjson"

    async def append(self, result: CheckResult) -> None:
        line = json.dumps(result.to_dict(), separators=(",", ":")) + "\n"

        await asyncio.to_thread(self._append_line, self.path_for(result.id), line)

    @staticmethod
    def _append_line(path: Path, line: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line)
            f.flush()
            os.fsync(f.fileno())


@lru_cache
def get_result_store() -> ResultStore:
    config = get_config()

    return NdjsonResultStore(checks_dir=config.DATA_DIR / "checks")
