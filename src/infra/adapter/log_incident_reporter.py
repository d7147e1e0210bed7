from functools import lru_cache

import structlog

from core.domain.incident import Incident
from core.port.incident_reporter import IncidentReporter

logger = structlog.stdlib.get_logger(__name__)


class LogIncidentReporter(IncidentReporter):
    """Emits the incident feed as structured log events.

    Opening and closing tickets is left to whatever consumes these events.
    """

    async def report_down(self, service_id: str, message: str) -> None:
        logger.debug("incident_down", service_id=service_id, reason=message)

    async def report_resolved(self, incident: Incident) -> None:
        logger.info(
            "incident_resolved",
            service_id=incident.service_id,
            opened_at=incident.opened_at,
            resolved_at=incident.resolved_at,
            down_checks=incident.down_checks,
        )


@lru_cache
def get_incident_reporter() -> IncidentReporter:
    return LogIncidentReporter()
