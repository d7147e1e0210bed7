from pathlib import Path

import structlog

from core.exceptions.data_directory_error import DataDirectoryError

logger = structlog.stdlib.get_logger(__name__)

DATA_SUBDIRECTORIES = ("checks", "summary", "incidents")


def ensure_data_directories(data_dir: Path) -> list[Path]:
    created: list[Path] = []

    for name in DATA_SUBDIRECTORIES:
        path = data_dir / name

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DataDirectoryError(path, e.strerror or str(e)) from e

        created.append(path)

    logger.debug(f"Data directories ready under '{data_dir}'")

    return created
