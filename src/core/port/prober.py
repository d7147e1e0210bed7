from abc import ABC, abstractmethod

from core.domain.check_result import CheckResult
from core.domain.service_spec import ServiceSpec


class Prober(ABC):
    @abstractmethod
    async def probe(self, service: ServiceSpec) -> CheckResult:
        raise NotImplementedError
