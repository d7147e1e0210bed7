import asyncio
import json
from pathlib import Path

import pytest

from core.domain.check_status import CheckStatus
from core.domain.summary import Summary
from infra.adapter.json_summary_repository import JsonSummaryRepository
from tests.support.fakes import FakeSummaryRepository, down_result, up_result
from use_cases.summary.update_summary_use_case import UpdateSummaryUseCase


@pytest.mark.asyncio
async def test_first_result_starts_from_zero_state() -> None:
    repository = FakeSummaryRepository()
    use_case = UpdateSummaryUseCase(repository)

    summary = await use_case.execute(up_result("web", response_time=120, timestamp=9))

    assert summary == Summary().fold(up_result("web", response_time=120, timestamp=9))
    assert repository.summaries["web"] == summary


@pytest.mark.asyncio
async def test_failed_check_lowers_uptime_of_existing_summary() -> None:
    seeded = Summary(total_checks=4, up_checks=4, avg_response_time=100, last_status=CheckStatus.UP, last_checked=1)
    repository = FakeSummaryRepository(initial_summaries={"api": seeded})
    use_case = UpdateSummaryUseCase(repository)

    summary = await use_case.execute(
        down_result("api", message="Expected status 200, 201, got 500", status_code=500, response_time=100)
    )

    assert summary.total_checks == 5
    assert summary.up_checks == 4
    assert summary.uptime_percentage == pytest.approx(80)
    assert summary.last_status is CheckStatus.DOWN


@pytest.mark.asyncio
async def test_web_scenario_across_restarts(data_dir: Path) -> None:
    results = [up_result("web", response_time=120, timestamp=index) for index in range(4)]
    results.append(down_result("web", message="timed out", timestamp=4))

    for result in results:
        # A fresh repository per run mimics separate processes sharing the data dir.
        use_case = UpdateSummaryUseCase(JsonSummaryRepository(summary_dir=data_dir / "summary"))
        await use_case.execute(result)

    payload = json.loads((data_dir / "summary" / "web.json").read_text(encoding="utf-8"))

    assert payload["totalChecks"] == 5
    assert payload["upChecks"] == 4
    assert payload["uptimePercentage"] == pytest.approx(80)
    assert payload["avgResponseTime"] == pytest.approx(120)
    assert payload["lastStatus"] == "down"
    assert payload["lastChecked"] == 4


@pytest.mark.asyncio
async def test_concurrent_updates_for_one_service_do_not_lose_counts() -> None:
    repository = FakeSummaryRepository()
    use_case = UpdateSummaryUseCase(repository)
    results = [up_result("api") if index % 2 else down_result("api") for index in range(30)]

    await asyncio.gather(*[use_case.execute(result) for result in results])

    assert repository.summaries["api"].total_checks == 30
    assert repository.summaries["api"].up_checks == 15


@pytest.mark.asyncio
async def test_concurrent_updates_against_files_do_not_lose_counts(data_dir: Path) -> None:
    repository = JsonSummaryRepository(summary_dir=data_dir / "summary")
    use_case = UpdateSummaryUseCase(repository)

    await asyncio.gather(*[use_case.execute(up_result("api", response_time=10)) for _ in range(10)])

    summary = await repository.get("api")

    assert summary.total_checks == 10
    assert summary.up_checks == 10
    assert summary.avg_response_time == pytest.approx(10)
