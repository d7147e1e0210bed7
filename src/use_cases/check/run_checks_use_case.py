import asyncio
from contextlib import nullcontext

import structlog

from core.domain.check_result import CheckResult
from core.domain.service_spec import ServiceSpec
from core.port.prober import Prober
from core.port.result_store import ResultStore
from use_cases.incident.notify_incidents_use_case import NotifyIncidentsUseCase
from use_cases.summary.update_summary_use_case import UpdateSummaryUseCase

logger = structlog.stdlib.get_logger(__name__)


class RunChecksUseCase:
    """Runs one monitoring pass over every configured service.

    Probes are issued concurrently, bounded by ``concurrency`` (``<= 0`` means
    unbounded). Each service's result is appended to its log and folded into
    its summary as soon as its probe finishes; incidents are evaluated once the
    whole batch has been persisted. Persistence errors propagate to the caller.
    """

    def __init__(
        self,
        prober: Prober,
        result_store: ResultStore,
        update_summary_use_case: UpdateSummaryUseCase,
        notify_incidents_use_case: NotifyIncidentsUseCase,
        concurrency: int = 0,
    ) -> None:
        self.prober = prober
        self.result_store = result_store
        self.update_summary_use_case = update_summary_use_case
        self.notify_incidents_use_case = notify_incidents_use_case
        self.concurrency = concurrency

    async def execute(self, services: list[ServiceSpec]) -> list[CheckResult]:
        logger.info(f"Starting monitoring checks for {len(services)} services...")

        semaphore = asyncio.Semaphore(self.concurrency) if self.concurrency > 0 else None

        async def check_and_record(service: ServiceSpec) -> CheckResult:
            async with semaphore if semaphore is not None else nullcontext():
                result = await self.prober.probe(service)

            await self.result_store.append(result)
            await self.update_summary_use_case.execute(result)

            return result

        results = list(await asyncio.gather(*[check_and_record(service) for service in services]))

        await self.notify_incidents_use_case.execute(results)

        down_count = len([result for result in results if not result.is_up])
        logger.info(f"Monitoring checks completed: {len(results)} services checked, {down_count} down")

        return results
