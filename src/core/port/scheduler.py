from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional


class Scheduler(ABC):
    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_interval_job(
        self,
        job_key: str,
        func: Callable[[], Awaitable[None]],
        interval_seconds: int,
        job_name: Optional[str] = None,
        run_immediately: bool = False,
    ) -> str:
        raise NotImplementedError

    @abstractmethod
    def remove_job(self, job_key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def has_job(self, job_key: str) -> bool:
        raise NotImplementedError
