from datetime import datetime, timezone
from functools import lru_cache
from typing import Awaitable, Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler, BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.port.scheduler import Scheduler


class LocalScheduler(Scheduler):
    def __init__(self, scheduler: BaseScheduler) -> None:
        self.scheduler = scheduler
        self._jobs: dict[str, str] = {}

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.shutdown(wait=True)

    def add_interval_job(
        self,
        job_key: str,
        func: Callable[[], Awaitable[None]],
        interval_seconds: int,
        job_name: Optional[str] = None,
        run_immediately: bool = False,
    ) -> str:
        if job_key in self._jobs:
            self.remove_job(job_key)

        job_kwargs = {}
        if run_immediately:
            job_kwargs["next_run_time"] = datetime.now(timezone.utc)

        job = self.scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id=job_key,
            name=job_name or job_key,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **job_kwargs,
        )

        self._jobs[job_key] = job.id

        return job.id

    def remove_job(self, job_key: str) -> bool:
        if job_key in self._jobs:
            job_id = self._jobs.pop(job_key)

            try:
                self.scheduler.remove_job(job_id)
                return True
            except JobLookupError:
                return False

        return False

    def has_job(self, job_key: str) -> bool:
        return job_key in self._jobs


@lru_cache
def get_local_scheduler() -> Scheduler:
    scheduler = AsyncIOScheduler()

    return LocalScheduler(scheduler)
