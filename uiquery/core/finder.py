# uiquery/core/finder.py
from __future__ import annotations

"""Finder
--------
The polling loop around the classifier: take a fresh snapshot, evaluate,
repeat at a fixed interval until the query succeeds or the timeout expires.
On timeout the accumulated query is raised as a QueryError.
"""

from typing import Any, Callable, Mapping, Optional, Tuple

from uiquery.core.classifier import evaluate
from uiquery.core.diagnostics import QueryError
from uiquery.core.errors import ExpectationNotMet
from uiquery.core.query import Query, build_query
from uiquery.selectors.locator import Locator
from uiquery.selectors.snapshot import MatchSnapshot, take_snapshot
from uiquery.utils.config import get_settings
from uiquery.utils.logger import get_logger, log_with_context
from uiquery.utils.timing import measure, now_ms, sleep_ms

log = get_logger(__name__)

SnapshotFn = Callable[[Any, Locator], MatchSnapshot]


def run_query(
    query: Query,
    *,
    snapshot_fn: SnapshotFn = take_snapshot,
    timeout_ms: Optional[int] = None,
    interval_ms: Optional[int] = None,
) -> Tuple[Query, bool]:
    """
    Re-evaluate `query` until an evaluation records no new failure, or the
    timeout runs out. There is always at least one evaluation.

    Returns ``(query, satisfied)``. A satisfied query may still carry failures
    from earlier attempts.
    """
    s = get_settings()
    timeout = s.DEFAULT_TIMEOUT_MS if timeout_ms is None else max(0, timeout_ms)
    interval = s.POLL_INTERVAL_MS if interval_ms is None else max(1, interval_ms)
    qlog = log_with_context(log, locator=str(query.locator))

    deadline = now_ms() + timeout
    attempt = 0
    while True:
        attempt += 1
        seen = len(query.errors)
        query = evaluate(query, snapshot_fn(query.parent, query.locator))
        if len(query.errors) == seen:
            qlog.debug(f"{query.locator} satisfied after {attempt} attempt(s)")
            return query, True
        if now_ms() >= deadline:
            qlog.info(f"{query.locator} still failing after {attempt} attempt(s): {query.errors[-1]}")
            return query, False
        sleep_ms(interval)


@measure("find")
def find(
    scope: Any,
    locator: Locator,
    conditions: Optional[Mapping[str, Any]] = None,
    *,
    snapshot_fn: SnapshotFn = take_snapshot,
    timeout_ms: Optional[int] = None,
    interval_ms: Optional[int] = None,
) -> Tuple[Any, ...]:
    """
    Find the elements `locator` matches under `scope`, honouring `conditions`.

    Returns the matched element snapshots.

    Raises:
        QueryError carrying the query and every failure it recorded.
    """
    query = build_query(scope, locator, conditions)
    final, satisfied = run_query(query, snapshot_fn=snapshot_fn, timeout_ms=timeout_ms, interval_ms=interval_ms)
    if not satisfied:
        raise QueryError(final)
    return final.result


def has(scope: Any, locator: Locator, conditions: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> bool:
    """True if `find` would succeed. Waits out the full timeout when it would not."""
    try:
        find(scope, locator, conditions, **kwargs)
    except QueryError:
        return False
    return True


def assert_has(scope: Any, locator: Locator, conditions: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Tuple[Any, ...]:
    """
    Like `find`, but a failing query surfaces as ExpectationNotMet so it reads
    as an assertion failure in test reports.
    """
    try:
        return find(scope, locator, conditions, **kwargs)
    except QueryError as e:
        raise ExpectationNotMet(str(e)) from e


def refute_has(scope: Any, locator: Locator, conditions: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
    """Assert that nothing matching `locator` (and `conditions`) is on the page."""
    absent = dict(conditions or {})
    absent["count"] = 0
    try:
        find(scope, locator, absent, **kwargs)
    except QueryError as e:
        raise ExpectationNotMet(str(e)) from e
