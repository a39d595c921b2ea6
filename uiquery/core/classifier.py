# uiquery/core/classifier.py
from __future__ import annotations

"""Failure classifier
--------------------
Compares one match snapshot against a query's conditions and decides which
failure kind (if any) applies. Pure: the same query and snapshot always give
the same answer, and the query passed in is never modified.
"""

from typing import Optional, Tuple

from uiquery.core import failures
from uiquery.core.conditions import ANY, expects_absence, text_filter
from uiquery.core.failures import Failure
from uiquery.core.query import Query
from uiquery.selectors.locator import LABELLED_STRATEGIES, LocatorStrategy
from uiquery.selectors.snapshot import ElementSnapshot, MatchSnapshot
from uiquery.utils.logger import get_logger

log = get_logger(__name__)

Elements = Tuple[ElementSnapshot, ...]


def _structural_failure(query: Query, snapshot: MatchSnapshot) -> Optional[Failure]:
    """Label and button problems that explain why nothing matched."""
    strategy = query.locator.strategy

    if strategy in LABELLED_STRATEGIES:
        for label in snapshot.labels:
            if not label.for_attr:
                return failures.LABEL_WITH_NO_FOR
            if label.for_attr not in snapshot.candidate_ids:
                return failures.label_does_not_find_field(label.for_attr)

    if strategy == LocatorStrategy.button and snapshot.untyped_buttons:
        return failures.BUTTON_WITH_NO_TYPE

    return None


def classify(query: Query, snapshot: MatchSnapshot) -> Tuple[Optional[Failure], Elements]:
    """
    Return ``(failure, elements)``.

    `failure` is None on success. `elements` are the matches that agree with
    the visibility expectation; on an ambiguous match they are what makes the
    count wrong.
    """
    conditions = query.conditions
    want_visible = bool(conditions.get("visible", True))
    count = conditions.get("count", 1)

    candidates = snapshot.elements
    text = text_filter(conditions)
    if text is not None:
        candidates = tuple(el for el in candidates if text in el.text)

    agreeing = tuple(el for el in candidates if el.visible == want_visible)
    disagreeing = tuple(el for el in candidates if el.visible != want_visible)

    if expects_absence(conditions):
        return (failures.FOUND, agreeing) if agreeing else (None, ())

    if not agreeing:
        structural = _structural_failure(query, snapshot)
        if structural is not None:
            return structural, ()
        if disagreeing:
            return (failures.NOT_VISIBLE if want_visible else failures.VISIBLE), ()
        return failures.NOT_FOUND, ()

    if count == ANY:
        return None, agreeing

    if len(agreeing) != count:
        return failures.AMBIGUOUS, agreeing

    return None, agreeing


def evaluate(query: Query, snapshot: MatchSnapshot) -> Query:
    """
    Classify `snapshot` and return the updated query.

    On success `result` becomes this evaluation's matches. On failure the
    failure is appended after those already recorded, and `result` is only
    replaced when this is the first failure, so it always belongs to the
    failure that gets reported.
    """
    failure, elements = classify(query, snapshot)
    if failure is None:
        log.debug(f"{query.locator}: matched {len(elements)} element(s)")
        return query.with_result(elements)
    updated = query if query.errors else query.with_result(elements)
    log.debug(f"{query.locator}: {failure} ({len(snapshot.elements)} raw match(es))")
    return updated.with_failure(failure)
