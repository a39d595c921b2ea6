# uiquery/core/conditions.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Union

ANY: Literal["any"] = "any"

Count = Union[int, Literal["any"]]
Conditions = Dict[str, Any]

DEFAULT_CONDITIONS: Mapping[str, Any] = {"visible": True, "count": 1}

# Keys that shape matching but are never echoed back as "and ..." clauses.
_UTILITY_KEYS = ("visible", "count")


def merge_conditions(user: Optional[Mapping[str, Any]] = None) -> Conditions:
    """
    Defaults first, then every user key on top.

    An explicit ``visible=False`` or ``count="any"`` always survives; defaults
    only fill keys the caller left out.
    """
    merged: Conditions = dict(DEFAULT_CONDITIONS)
    merged.update(user or {})
    return merged


def expects_absence(conditions: Mapping[str, Any]) -> bool:
    return conditions.get("count") == 0


def text_filter(conditions: Mapping[str, Any]) -> Optional[str]:
    text = conditions.get("text")
    return text if isinstance(text, str) else None


def _condition(key: str, value: Any) -> Optional[str]:
    if key == "text" and isinstance(value, str):
        return f"text: '{value}'"
    return None


def extra_conditions(conditions: Mapping[str, Any]) -> List[str]:
    """Clauses appended to a not-found message, e.g. ``["text: 'hello'"]``."""
    clauses = (_condition(k, v) for k, v in conditions.items() if k not in _UTILITY_KEYS)
    return [c for c in clauses if c is not None]
