# uiquery/core/query.py
from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from uiquery.core.conditions import merge_conditions
from uiquery.core.failures import Failure
from uiquery.selectors.locator import Locator


@dataclass(frozen=True)
class Query:
    """
    One find attempt: where to look, what to look for, what is expected,
    and what every evaluation so far has turned up.

    Values are never mutated in place; `with_failure` / `with_result`
    return updated copies. `conditions` is a read-only view over a private
    copy, so no two queries can change each other's expectations.
    """
    parent: Any
    locator: Locator
    conditions: Mapping[str, Any]
    result: Tuple[Any, ...] = ()
    errors: Tuple[Failure, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.conditions, MappingProxyType):
            object.__setattr__(self, "conditions", MappingProxyType(dict(self.conditions)))

    @property
    def first_error(self) -> Optional[Failure]:
        return self.errors[0] if self.errors else None

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def with_failure(self, failure: Failure) -> "Query":
        return replace(self, errors=self.errors + (failure,))

    def with_result(self, elements: Iterable[Any]) -> "Query":
        return replace(self, result=tuple(elements))


def build_query(parent: Any, locator: Locator, conditions: Optional[Mapping[str, Any]] = None) -> Query:
    """Create a fresh query with default conditions merged in. Never fails."""
    return Query(parent=parent, locator=locator, conditions=merge_conditions(conditions))
