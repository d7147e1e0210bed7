from abc import ABC, abstractmethod

from core.domain.check_result import CheckResult


class ResultStore(ABC):
    @abstractmethod
    async def append(self, result: CheckResult) -> None:
        raise NotImplementedError
