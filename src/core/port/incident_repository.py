from abc import ABC, abstractmethod
from typing import Optional

from core.domain.incident import Incident


class IncidentRepository(ABC):
    @abstractmethod
    async def get(self, service_id: str) -> Optional[Incident]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, incident: Incident) -> Incident:
        raise NotImplementedError
