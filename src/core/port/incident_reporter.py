from abc import ABC, abstractmethod

from core.domain.incident import Incident


class IncidentReporter(ABC):
    @abstractmethod
    async def report_down(self, service_id: str, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def report_resolved(self, incident: Incident) -> None:
        raise NotImplementedError
