from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

_HEURISTICS_PATH = Path(__file__).resolve().with_name("heuristics.yaml")


@lru_cache(maxsize=1)
def get_heuristics_config() -> dict[str, Any]:
    parsed = yaml.safe_load(_HEURISTICS_PATH.read_text(encoding="utf-8"))
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Heuristics file '{_HEURISTICS_PATH}' must hold a mapping.")
    return parsed


def get_heuristic_value(path: str, default: Any = None) -> Any:
    """Look up a dotted path such as ``classifier.ats.cap``; missing keys give ``default``."""
    current: Any = get_heuristics_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
