import json
import os
from pathlib import Path
from typing import Any, Optional


def read_json(path: Path) -> Optional[Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None


def write_json_atomic(path: Path, payload: Any) -> None:
    tmp = path.with_name(f"{path.name}.tmp")

    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.flush()
        os.fsync(f.fileno())

    tmp.replace(path)
