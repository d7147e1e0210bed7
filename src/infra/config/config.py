from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infra.utils.version import get_version


class LoggingConfig(BaseModel):
    LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    JSON_FORMAT: bool = False
    LIBRARY_LOG_LEVELS: dict[str, str | int] = Field(default_factory=lambda: {"httpx": "WARNING"})


class Config(BaseSettings):
    APP_NAME: str = "py-uptime-monitor"
    VERSION: str = get_version()
    ENVIRONMENT: Literal["loc", "dev", "pre", "pro"] = "dev"

    LOGGING_CONFIG: LoggingConfig = LoggingConfig()

    DATA_DIR: Path = Path("./data")
    MONITOR_CONFIG_PATH: Path = Path("./monitor.config.yml")

    SCHEDULE_INTERVAL_SECONDS: Optional[int] = None

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_nested_delimiter="__",
    )

    @field_validator("SCHEDULE_INTERVAL_SECONDS")
    @classmethod
    def validate_schedule_interval(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("SCHEDULE_INTERVAL_SECONDS must be a positive number of seconds")

        return value


@lru_cache
def get_config() -> Config:
    return Config()
