import logging
import sys
from typing import Callable, Literal

import structlog
from structlog.types import EventDict, Processor

OFF_LOG_LEVEL = logging.CRITICAL + 1

# Loggers of the HTTP client and scheduler, routed through the root handler.
# A level here is the default before LIBRARY_LOG_LEVELS overrides apply.
LIBRARY_LOGGERS: dict[str, int | None] = {
    "httpx": None,
    "httpcore": logging.WARNING,
    "apscheduler": None,
    # "Running job ..." / "executed successfully" on every scheduled run
    "apscheduler.executors.default": logging.WARNING,
}


def add_run_context(app_name: str, environment: str, version: str) -> Processor:
    def processor(logger: structlog.BoundLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", app_name)
        event_dict.setdefault("version", version)
        event_dict["environment"] = environment

        return event_dict

    return processor


def _normalize_log_level(level: str | int) -> int:
    if isinstance(level, int):
        return level

    normalized_level = level.strip().upper()

    if normalized_level == "OFF":
        return OFF_LOG_LEVEL

    level_map = logging.getLevelNamesMapping()

    if normalized_level in level_map:
        return level_map[normalized_level]

    raise ValueError(
        f"Invalid log level '{level}'. Supported values are DEBUG, INFO, WARNING, ERROR, CRITICAL, OFF, or an integer."
    )


def _route_library_loggers() -> None:
    for logger_name, default_level in LIBRARY_LOGGERS.items():
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.propagate = True
        logger.disabled = False

        if default_level is not None:
            logger.setLevel(default_level)


def _apply_library_log_levels(library_log_levels: dict[str, str | int]) -> None:
    for logger_name, configured_level in library_log_levels.items():
        if not logger_name or not logger_name.strip():
            raise ValueError("Logger name in library_log_levels cannot be empty.")

        logger = logging.getLogger(logger_name)
        level = _normalize_log_level(configured_level)
        logger.setLevel(level)

        is_off = level == OFF_LOG_LEVEL
        logger.disabled = is_off
        logger.propagate = not is_off

        if is_off:
            logger.handlers.clear()


def _build_renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()

    return structlog.dev.ConsoleRenderer()


def _install_excepthook(root_logger: logging.Logger) -> Callable:
    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        root_logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception

    return handle_exception


def configure_logging(
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    service_name: str,
    environment: Literal["loc", "dev", "pre", "pro"],
    json_logs: bool,
    library_log_levels: dict[str, str | int] | None = None,
    version: str = "unknown",
) -> None:
    """Route structlog and stdlib records through one root handler.

    Messages keep the f-string text used across the monitor; bound
    context (``run_id`` during a monitoring pass) is merged in from
    contextvars, and ``app``/``version``/``environment`` are stamped on
    every record so JSON output from several deployments can be told apart.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_run_context(service_name, environment, version),
    ]

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(json_logs),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    _route_library_loggers()

    if library_log_levels:
        _apply_library_log_levels(library_log_levels)

    _install_excepthook(root_logger)
