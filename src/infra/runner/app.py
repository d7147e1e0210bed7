import asyncio
import signal
from contextlib import suppress
from typing import Optional
from uuid import uuid4

import httpx
import structlog
from structlog.contextvars import bound_contextvars

from core.domain.check_result import CheckResult
from core.domain.service_spec import ServiceSpec
from core.port.scheduler import Scheduler
from infra.adapter.data_directory import ensure_data_directories
from infra.adapter.json_incident_repository import get_incident_repository
from infra.adapter.json_summary_repository import get_summary_repository
from infra.adapter.local_scheduler import get_local_scheduler
from infra.adapter.log_incident_reporter import get_incident_reporter
from infra.adapter.ndjson_result_store import get_result_store
from infra.config.config import Config, get_config
from infra.config.monitor_document import MonitorDocument, load_monitor_document
from infra.logging.config import configure_logging
from infra.services.http_prober import HttpProber
from use_cases.check.run_checks_use_case import RunChecksUseCase
from use_cases.incident.notify_incidents_use_case import NotifyIncidentsUseCase
from use_cases.summary.update_summary_use_case import UpdateSummaryUseCase

logger = structlog.stdlib.get_logger(__name__)

RUN_CHECKS_JOB_KEY = "run_checks"


class MonitorRunner:
    def __init__(self, services: list[ServiceSpec], run_checks_use_case: RunChecksUseCase) -> None:
        self.services = services
        self.run_checks_use_case = run_checks_use_case

    async def run_once(self) -> list[CheckResult]:
        with bound_contextvars(run_id=uuid4().hex[:12]):
            return await self.run_checks_use_case.execute(self.services)

    async def run_scheduled(
        self,
        scheduler: Scheduler,
        interval_seconds: int,
        stop_event: Optional[asyncio.Event] = None,
    ) -> None:
        stop_event = stop_event or asyncio.Event()
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, stop_event.set)

        scheduler.start()
        scheduler.add_interval_job(
            job_key=RUN_CHECKS_JOB_KEY,
            func=self._scheduled_run,
            interval_seconds=interval_seconds,
            job_name="Run monitoring checks",
            run_immediately=True,
        )

        logger.info(f"Monitoring scheduled every {interval_seconds}s for {len(self.services)} services")

        try:
            await stop_event.wait()
        finally:
            scheduler.remove_job(RUN_CHECKS_JOB_KEY)
            scheduler.stop()

            for sig in (signal.SIGINT, signal.SIGTERM):
                with suppress(NotImplementedError, RuntimeError):
                    loop.remove_signal_handler(sig)

            logger.info("Monitoring scheduler stopped")

    async def _scheduled_run(self) -> None:
        try:
            await self.run_once()
        except Exception as e:
            logger.exception(f"Scheduled monitoring run failed: {e}")


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(60.0),
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        follow_redirects=True,
    )


def create_runner(document: MonitorDocument, http_client: httpx.AsyncClient) -> MonitorRunner:
    settings = document.settings

    run_checks_use_case = RunChecksUseCase(
        prober=HttpProber(http_client=http_client, settings=settings),
        result_store=get_result_store(),
        update_summary_use_case=UpdateSummaryUseCase(get_summary_repository()),
        notify_incidents_use_case=NotifyIncidentsUseCase(get_incident_repository(), get_incident_reporter()),
        concurrency=settings.concurrency,
    )

    return MonitorRunner(services=document.service_specs, run_checks_use_case=run_checks_use_case)


async def run(config: Config) -> int:
    document = load_monitor_document(config.MONITOR_CONFIG_PATH)
    ensure_data_directories(config.DATA_DIR)

    if document.settings.retries:
        logger.info(f"Transport failures are retried up to {document.settings.retries} times")

    async with create_http_client() as http_client:
        runner = create_runner(document, http_client)

        if config.SCHEDULE_INTERVAL_SECONDS is None:
            await runner.run_once()
        else:
            await runner.run_scheduled(get_local_scheduler(), config.SCHEDULE_INTERVAL_SECONDS)

    return 0


def main() -> int:
    try:
        config = get_config()
    except Exception as e:
        logger.error(f"Monitoring failed: invalid settings: {e}")
        return 1

    configure_logging(
        log_level=config.LOGGING_CONFIG.LEVEL,
        json_logs=config.LOGGING_CONFIG.JSON_FORMAT,
        service_name=config.APP_NAME,
        environment=config.ENVIRONMENT,
        library_log_levels=config.LOGGING_CONFIG.LIBRARY_LOG_LEVELS,
        version=config.VERSION,
    )

    try:
        return asyncio.run(run(config))
    except Exception as e:
        logger.exception(f"Monitoring failed: {e}")
        return 1
