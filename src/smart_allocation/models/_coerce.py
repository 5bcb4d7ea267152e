"""Shared input coercion for list-valued fields."""

import json
from typing import Any


def coerce_to_list(v: Any) -> list[str]:
    """Coerce form-style input to a list of trimmed strings.

    Accepts lists, JSON array strings and comma-separated strings.
    Blank entries are dropped.
    """
    if v is None:
        return []
    if isinstance(v, (list, tuple, set, frozenset)):
        items = [str(item).strip() for item in v]
        return [item for item in items if item]
    if isinstance(v, str):
        v = v.strip()
        if v.startswith("["):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return coerce_to_list(parsed)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return [str(v)]
