import structlog

from core.domain.check_result import CheckResult
from core.domain.incident import Incident, IncidentState
from core.port.incident_reporter import IncidentReporter
from core.port.incident_repository import IncidentRepository

logger = structlog.stdlib.get_logger(__name__)


class NotifyIncidentsUseCase:
    def __init__(self, incident_repository: IncidentRepository, incident_reporter: IncidentReporter) -> None:
        self.incident_repository = incident_repository
        self.incident_reporter = incident_reporter

    async def execute(self, results: list[CheckResult]) -> list[Incident]:
        incidents: list[Incident] = []

        for result in results:
            stored = await self.incident_repository.get(result.id)
            previous = stored or Incident(service_id=result.id)

            incident = previous.apply(result)

            if not result.is_up:
                message = result.message or "Request failed"
                logger.warning(f"INCIDENT: Service {result.id} is down - {message}")
                await self.incident_reporter.report_down(result.id, message)

            elif previous.is_firing and incident.state is IncidentState.RESOLVED:
                logger.info(f"Incident resolved for service {result.id} after {incident.down_checks} down checks")
                await self.incident_reporter.report_resolved(incident)

            if stored is None or incident != previous:
                incident = await self.incident_repository.save(incident)

            incidents.append(incident)

        return incidents
