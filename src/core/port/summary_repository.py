from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Optional

from core.domain.summary import Summary


class SummaryRepository(ABC):
    @abstractmethod
    def lock(self, service_id: str) -> AbstractAsyncContextManager[None]:
        raise NotImplementedError

    @abstractmethod
    async def get(self, service_id: str) -> Optional[Summary]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, service_id: str, summary: Summary) -> Summary:
        raise NotImplementedError
