# uiquery/core/diagnostics.py
from __future__ import annotations

"""Query diagnostics
-------------------
Turns a failed query into the message a test author sees. Only the first
recorded failure is rendered; the rest stay on the query for debugging.
"""

from typing import Any, Callable, Dict

from uiquery.core.conditions import extra_conditions
from uiquery.core.failures import Failure, FailureKind
from uiquery.core.query import Query
from uiquery.selectors.locator import expression, method


class NoFailureRecorded(ValueError):
    """render() was asked to explain a query that never failed."""


def times(count: Any) -> str:
    return "1 time" if count == 1 else f"{count} times"


def _visibility(conditions: Dict[str, Any]) -> str:
    return "visible" if conditions.get("visible") else "invisible"


# ---------- Message templates (one per failure kind) ----------

def _not_found(query: Query, failure: Failure) -> str:
    loc = query.locator
    msg = f"Could not find any {_visibility(query.conditions)} {method(loc)} that matched: '{expression(loc)}'"
    return " and ".join([msg] + extra_conditions(query.conditions))


def _found(query: Query, failure: Failure) -> str:
    loc = query.locator
    return f"The element with {method(loc)}: '{expression(loc)}' should not have been found but was found.\n"


def _visible(query: Query, failure: Failure) -> str:
    loc = query.locator
    return (
        f"The {method(loc)} that matched: '{expression(loc)}' should not have been visible but was.\n"
        "\n"
        "If you expect the element to be visible to the user then you should\n"
        "remove the `visible: false` option from your finder.\n"
    )


def _not_visible(query: Query, failure: Failure) -> str:
    loc = query.locator
    return (
        f"The {method(loc)}: '{expression(loc)}' was found but it's not visible to a real user.\n"
        "\n"
        "If you expect the element to be invisible to the user then you should\n"
        "include the `visible: false` option in your finder.\n"
    )


def _ambiguous(query: Query, failure: Failure) -> str:
    loc = query.locator
    found = len(query.result)
    expected = query.conditions.get("count")
    return (
        f"The {method(loc)} that matched: '{expression(loc)}' was found but the results are ambiguous.\n"
        f"It was found {times(found)} but it should have been found {times(expected)}.\n"
        "\n"
        f"If you expect to find the selector {times(found)} then you\n"
        f"should include the `count: {found}` option in your finder.\n"
    )


def _label_with_no_for(query: Query, failure: Failure) -> str:
    loc = query.locator
    return (
        f"The text '{expression(loc)}' matched a label but the label has no 'for'\n"
        f"attribute and can't be used to find the correct {method(loc)}.\n"
        "\n"
        'You can fix this by including the `for="YOUR_INPUT_ID"` attribute on the\n'
        "appropriate label.\n"
    )


def _label_does_not_find_field(query: Query, failure: Failure) -> str:
    loc = query.locator
    return (
        f"The text '{expression(loc)}' matched a label but the label's 'for' attribute\n"
        f"doesn't match the id of any {method(loc)}.\n"
        "\n"
        f'Make sure that id on your {method(loc)} is `id="{failure.for_text}"`.\n'
    )


def _button_with_no_type(query: Query, failure: Failure) -> str:
    loc = query.locator
    return (
        f"The text '{expression(loc)}' matched a button but the button has no 'type' attribute.\n"
        "\n"
        'You can fix this by including `type="[submit|reset|button|image]"` on the appropriate button.\n'
    )


_TEMPLATES: Dict[FailureKind, Callable[[Query, Failure], str]] = {
    FailureKind.not_found: _not_found,
    FailureKind.found: _found,
    FailureKind.visible: _visible,
    FailureKind.not_visible: _not_visible,
    FailureKind.ambiguous: _ambiguous,
    FailureKind.label_with_no_for: _label_with_no_for,
    FailureKind.label_does_not_find_field: _label_does_not_find_field,
    FailureKind.button_with_no_type: _button_with_no_type,
}


def render(query: Query) -> str:
    """
    Message for the first failure recorded on `query`.

    Raises:
        NoFailureRecorded if the query has no errors.
    """
    failure = query.first_error
    if failure is None:
        raise NoFailureRecorded(f"query for {query.locator} has no recorded failures")
    return _TEMPLATES[failure.kind](query, failure)


class QueryError(AssertionError):
    """
    Raised when a query is still failing once the finder gives up.
    The full query, every recorded failure included, is kept on `.query`.
    """

    def __init__(self, query: Query):
        super().__init__(render(query))
        self.query = query

    @classmethod
    def from_query(cls, query: Query) -> "QueryError":
        return cls(query)

    @property
    def failures(self):
        return self.query.errors
