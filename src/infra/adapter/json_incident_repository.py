import asyncio
from functools import lru_cache
from pathlib import Path
from typing import Optional

from core.domain.incident import Incident
from core.port.incident_repository import IncidentRepository
from infra.adapter.json_file import read_json, write_json_atomic
from infra.config.config import get_config


class JsonIncidentRepository(IncidentRepository):
    def __init__(self, incidents_dir: Path) -> None:
        self.incidents_dir = incidents_dir

    def path_for(self, service_id: str) -> Path:
        return self.incidents_dir / f"{service_id}.json"

    async def get(self, service_id: str) -> Optional[Incident]:
        payload = await asyncio.to_thread(read_json, self.path_for(service_id))

        if payload is None:
            return None

        return Incident.from_dict(payload)

    async def save(self, incident: Incident) -> Incident:
        await asyncio.to_thread(write_json_atomic, self.path_for(incident.service_id), incident.to_dict())

        return incident


@lru_cache
def get_incident_repository() -> IncidentRepository:
    config = get_config()

    return JsonIncidentRepository(incidents_dir=config.DATA_DIR / "incidents")
