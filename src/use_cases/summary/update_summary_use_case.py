import structlog

from core.domain.check_result import CheckResult
from core.domain.summary import Summary
from core.port.summary_repository import SummaryRepository

logger = structlog.stdlib.get_logger(__name__)


class UpdateSummaryUseCase:
    def __init__(self, summary_repository: SummaryRepository) -> None:
        self.summary_repository = summary_repository

    async def execute(self, result: CheckResult) -> Summary:
        async with self.summary_repository.lock(result.id):
            current = await self.summary_repository.get(result.id)

            if current is None:
                current = Summary()

            updated = current.fold(result)

            logger.debug(
                f"Summary for '{result.id}': total={updated.total_checks}, up={updated.up_checks}, "
                f"uptime={updated.uptime_percentage:.2f}%, avg_response_time={updated.avg_response_time:.2f}ms"
            )

            return await self.summary_repository.save(result.id, updated)
