import pytest

from core.domain.service_spec import ServiceSpec
from tests.support.fakes import (
    FakeIncidentReporter,
    FakeIncidentRepository,
    FakeProber,
    FakeResultStore,
    FakeSummaryRepository,
    down_result,
)
from use_cases.check.run_checks_use_case import RunChecksUseCase
from use_cases.incident.notify_incidents_use_case import NotifyIncidentsUseCase
from use_cases.summary.update_summary_use_case import UpdateSummaryUseCase


def _services(*service_ids: str) -> list[ServiceSpec]:
    return [
        ServiceSpec(id=service_id, name=service_id, url=f"https://{service_id}.example.com")
        for service_id in service_ids
    ]


def _use_case(
    prober: FakeProber,
    result_store: FakeResultStore | None = None,
    summary_repository: FakeSummaryRepository | None = None,
    reporter: FakeIncidentReporter | None = None,
    concurrency: int = 0,
) -> RunChecksUseCase:
    return RunChecksUseCase(
        prober=prober,
        result_store=result_store or FakeResultStore(),
        update_summary_use_case=UpdateSummaryUseCase(summary_repository or FakeSummaryRepository()),
        notify_incidents_use_case=NotifyIncidentsUseCase(FakeIncidentRepository(), reporter or FakeIncidentReporter()),
        concurrency=concurrency,
    )


@pytest.mark.asyncio
async def test_execute_returns_one_result_per_service_in_order() -> None:
    use_case = _use_case(FakeProber())

    results = await use_case.execute(_services("api", "web", "docs"))

    assert [result.id for result in results] == ["api", "web", "docs"]


@pytest.mark.asyncio
async def test_each_result_is_appended_then_folded_into_summary() -> None:
    events: list[tuple[str, str]] = []
    result_store = FakeResultStore(events=events)
    summary_repository = FakeSummaryRepository(events=events)
    use_case = _use_case(FakeProber(events=events), result_store, summary_repository)

    await use_case.execute(_services("api", "web"))

    for service_id in ("api", "web"):
        service_events = [name for name, event_id in events if event_id == service_id]
        assert service_events == ["probe", "append", "summary"]

    assert [result.id for result in result_store.results] == ["api", "web"]
    assert summary_repository.summaries["api"].total_checks == 1


@pytest.mark.asyncio
async def test_down_results_reach_incident_reporter_after_batch() -> None:
    reporter = FakeIncidentReporter()
    prober = FakeProber(results={"api": down_result("api", message="Expected status 200, 201, got 500", status_code=500)})
    use_case = _use_case(prober, reporter=reporter)

    results = await use_case.execute(_services("api", "web"))

    assert [result.is_up for result in results] == [False, True]
    assert reporter.down == [("api", "Expected status 200, 201, got 500")]


@pytest.mark.asyncio
async def test_concurrency_limit_bounds_in_flight_probes() -> None:
    prober = FakeProber(delay_seconds=0.01)
    use_case = _use_case(prober, concurrency=2)

    await use_case.execute(_services("a", "b", "c", "d", "e"))

    assert prober.max_in_flight == 2


@pytest.mark.asyncio
async def test_non_positive_concurrency_runs_every_probe_at_once() -> None:
    prober = FakeProber(delay_seconds=0.01)
    use_case = _use_case(prober, concurrency=0)

    await use_case.execute(_services("a", "b", "c", "d", "e"))

    assert prober.max_in_flight == 5


@pytest.mark.asyncio
async def test_persistence_errors_propagate() -> None:
    use_case = _use_case(FakeProber(), result_store=FakeResultStore(error=OSError("disk full")))

    with pytest.raises(OSError, match="disk full"):
        await use_case.execute(_services("api"))


@pytest.mark.asyncio
async def test_empty_service_list_completes() -> None:
    use_case = _use_case(FakeProber())

    assert await use_case.execute([]) == []
