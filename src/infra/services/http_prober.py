import asyncio
import logging
import time
from typing import Callable, Optional

import httpx
import structlog

from core.domain.check_result import CheckResult
from core.domain.check_status import CheckStatus
from core.domain.monitor_settings import MonitorSettings
from core.domain.service_spec import ServiceSpec
from core.port.prober import Prober

logger = structlog.stdlib.get_logger(__name__)

DEFAULT_FAILURE_MESSAGE = "Request failed"


def _epoch_millis() -> int:
    return int(time.time() * 1_000)


class HttpProber(Prober):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: MonitorSettings,
        clock: Callable[[], float] = time.perf_counter,
        now_ms: Callable[[], int] = _epoch_millis,
    ) -> None:
        self.http_client = http_client
        self.settings = settings

        self._clock = clock
        self._now_ms = now_ms

    async def probe(self, service: ServiceSpec) -> CheckResult:
        attempts = self.settings.retries + 1

        for attempt in range(1, attempts + 1):
            start_time = self._clock()

            try:
                async with asyncio.timeout(self.settings.timeout_seconds):
                    response = await self.http_client.request(
                        service.method or "GET",
                        service.url,
                        timeout=self.settings.timeout_seconds,
                        headers={"User-Agent": self.settings.user_agent},
                    )

                response_time_ms = self._elapsed_ms(start_time)

                return self._evaluate(service, response, response_time_ms)

            except (TimeoutError, httpx.TimeoutException, httpx.RequestError) as e:
                elapsed_ms = self._elapsed_ms(start_time)
                message = self._failure_message(e)

                if attempt < attempts:
                    logger.info(
                        f"Health check attempt {attempt}/{attempts} failed for '{service.id}' "
                        f"after {elapsed_ms}ms: {message}; retrying"
                    )
                    await asyncio.sleep(self.settings.retry_backoff_ms * attempt / 1_000)
                    continue

                logger.error(f"Health check failed for '{service.id}' after {elapsed_ms}ms: {message}")

                return self._failure(service, message)

            except Exception as e:
                elapsed_ms = self._elapsed_ms(start_time)
                logger.exception(f"Unexpected error checking '{service.id}' after {elapsed_ms}ms: {e}")

                return self._failure(service, str(e) or DEFAULT_FAILURE_MESSAGE)

        return self._failure(service, DEFAULT_FAILURE_MESSAGE)

    def _evaluate(self, service: ServiceSpec, response: httpx.Response, response_time_ms: int) -> CheckResult:
        failure: Optional[str] = None

        if service.assertions is not None:
            failure = service.assertions.check_status_code(response.status_code)

            if failure is None:
                failure = service.assertions.check_body(response.text)

        is_up = failure is None

        log_level = logging.INFO if is_up else logging.WARNING
        logger.log(
            log_level,
            f"Health check '{service.id}': "
            f"status_code={response.status_code}, "
            f"response_time={response_time_ms}ms, "
            f"status={'up' if is_up else 'down'}",
        )

        return CheckResult(
            id=service.id,
            timestamp=self._now_ms(),
            status=CheckStatus.UP if is_up else CheckStatus.DOWN,
            status_code=response.status_code,
            response_time=response_time_ms,
            message="OK" if is_up else failure,
        )

    def _failure_message(self, error: Exception) -> str:
        if isinstance(error, TimeoutError):
            return f"Timeout of {self.settings.timeout_ms}ms exceeded"

        return str(error) or DEFAULT_FAILURE_MESSAGE

    def _failure(self, service: ServiceSpec, message: str) -> CheckResult:
        return CheckResult(
            id=service.id,
            timestamp=self._now_ms(),
            status=CheckStatus.DOWN,
            message=message,
        )

    def _elapsed_ms(self, start_time: float) -> int:
        return int(round((self._clock() - start_time) * 1_000))
