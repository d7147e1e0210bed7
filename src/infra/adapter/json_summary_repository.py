import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from core.domain.summary import Summary
from core.exceptions.summary_corrupted_error import SummaryCorruptedError
from core.port.summary_repository import SummaryRepository
from infra.adapter.json_file import read_json, write_json_atomic
from infra.config.config import get_config


class JsonSummaryRepository(SummaryRepository):
    """One pretty-printed JSON summary per service under ``summary_dir``.

    ``lock`` serializes read-modify-write cycles for a service id: an
    ``asyncio.Lock`` orders coroutines inside this process and an exclusive
    lock on ``<id>.json.lock`` orders concurrent processes. The file lock is
    polled without blocking, so a cancelled waiter never ends up holding it.
    """

    def __init__(self, summary_dir: Path, poll_interval: float = 0.05) -> None:
        self.summary_dir = summary_dir
        self.poll_interval = poll_interval
        self._locks: dict[str, asyncio.Lock] = {}

    def path_for(self, service_id: str) -> Path:
        return self.summary_dir / f"{service_id}.json"

    @asynccontextmanager
    async def lock(self, service_id: str) -> AsyncIterator[None]:
        process_lock = self._locks.setdefault(service_id, asyncio.Lock())
        file_lock = FileLock(f"{self.path_for(service_id)}.lock", thread_local=False)

        async with process_lock:
            await self._acquire(file_lock)
            try:
                yield
            finally:
                file_lock.release()

    async def _acquire(self, file_lock: FileLock) -> None:
        while True:
            try:
                file_lock.acquire(timeout=0)
                return
            except Timeout:
                await asyncio.sleep(self.poll_interval)

    async def get(self, service_id: str) -> Optional[Summary]:
        path = self.path_for(service_id)

        try:
            payload = await asyncio.to_thread(read_json, path)
        except json.JSONDecodeError as e:
            raise SummaryCorruptedError(service_id, path) from e

        if payload is None:
            return None

        try:
            return Summary.from_dict(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise SummaryCorruptedError(service_id, path) from e

    async def save(self, service_id: str, summary: Summary) -> Summary:
        await asyncio.to_thread(write_json_atomic, self.path_for(service_id), summary.to_dict())

        return summary


@lru_cache
def get_summary_repository() -> SummaryRepository:
    config = get_config()

    return JsonSummaryRepository(summary_dir=config.DATA_DIR / "summary")
