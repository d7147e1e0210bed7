"""Loader for the monitor document (``monitor.config.yml``).

The document keeps the camelCase keys of the published format::

    monitor:
      timeoutMs: 10000
      retries: 0
      concurrency: 10
      userAgent: py-uptime-monitor
    services:
      - id: api
        name: Public API
        url: https://api.example.com/health
        assertions:
          status: [200, 201]
          containsText: ok

Only what the runner depends on is checked here: unique service ids that are
safe to use as file names. Sections the runner does not consume (``site``)
are ignored.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.domain.monitor_settings import MonitorSettings
from core.domain.service_assertions import ServiceAssertions
from core.domain.service_spec import ServiceSpec
from core.exceptions.monitor_config_error import MonitorConfigError


class AssertionsDocument(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status: Optional[list[int]] = None
    contains_text: Optional[str] = Field(default=None, alias="containsText")

    def to_domain(self) -> ServiceAssertions:
        return ServiceAssertions(
            status=tuple(self.status) if self.status is not None else None,
            contains_text=self.contains_text or None,
        )


class ServiceDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    url: str
    group: str = "default"
    method: str = "GET"
    assertions: Optional[AssertionsDocument] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        value = value.strip()

        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"Service id '{value}' cannot be used as a file name")

        return value

    @field_validator("method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        return (value or "GET").strip().upper()

    def to_domain(self) -> ServiceSpec:
        return ServiceSpec(
            id=self.id,
            name=self.name,
            url=self.url,
            method=self.method,
            group=self.group,
            assertions=self.assertions.to_domain() if self.assertions else None,
        )


class MonitorSection(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    timeout_ms: int = Field(default=10_000, alias="timeoutMs", gt=0)
    retries: int = Field(default=0, ge=0)
    retry_backoff_ms: int = Field(default=500, alias="retryBackoffMs", ge=0)
    concurrency: int = 10
    user_agent: str = Field(default="py-uptime-monitor", alias="userAgent")

    def to_domain(self) -> MonitorSettings:
        return MonitorSettings(
            timeout_ms=self.timeout_ms,
            user_agent=self.user_agent,
            retries=self.retries,
            retry_backoff_ms=self.retry_backoff_ms,
            concurrency=self.concurrency,
        )


class MonitorDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    monitor: MonitorSection = MonitorSection()
    services: list[ServiceDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_service_ids(self) -> "MonitorDocument":
        seen: set[str] = set()
        duplicated: set[str] = set()

        for service in self.services:
            if service.id in seen:
                duplicated.add(service.id)
            seen.add(service.id)

        if duplicated:
            raise ValueError(f"Duplicated service ids: {', '.join(sorted(duplicated))}")

        return self

    @property
    def settings(self) -> MonitorSettings:
        return self.monitor.to_domain()

    @property
    def service_specs(self) -> list[ServiceSpec]:
        return [service.to_domain() for service in self.services]


def load_monitor_document(path: Path) -> MonitorDocument:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise MonitorConfigError(path, f"cannot read file ({e.strerror or e})") from e
    except yaml.YAMLError as e:
        raise MonitorConfigError(path, f"invalid YAML ({e})") from e

    if not isinstance(raw, dict):
        raise MonitorConfigError(path, "document must be a mapping")

    try:
        return MonitorDocument.model_validate(raw)
    except ValidationError as e:
        raise MonitorConfigError(path, str(e)) from e

