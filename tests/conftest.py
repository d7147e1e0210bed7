from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import httpx
import pytest

from infra.adapter.json_incident_repository import get_incident_repository
from infra.adapter.json_summary_repository import get_summary_repository
from infra.adapter.local_scheduler import get_local_scheduler
from infra.adapter.log_incident_reporter import get_incident_reporter
from infra.adapter.ndjson_result_store import get_result_store
from infra.config.config import get_config


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    for name in ("checks", "summary", "incidents"):
        (path / name).mkdir(parents=True)

    return path


@pytest.fixture(autouse=True)
def _set_required_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MONITOR_CONFIG_PATH", str(tmp_path / "monitor.config.yml"))
    monkeypatch.delenv("SCHEDULE_INTERVAL_SECONDS", raising=False)


@pytest.fixture(autouse=True)
def _reset_cached_singletons() -> Generator[None, None, None]:
    cacheables = [
        get_config,
        get_result_store,
        get_summary_repository,
        get_incident_repository,
        get_incident_reporter,
        get_local_scheduler,
    ]

    for cacheable in cacheables:
        cacheable.cache_clear()

    yield

    for cacheable in cacheables:
        cacheable.cache_clear()


@pytest.fixture
async def mock_client_factory() -> AsyncGenerator:
    clients: list[httpx.AsyncClient] = []

    def _factory(handler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    try:
        yield _factory
    finally:
        for client in clients:
            await client.aclose()
