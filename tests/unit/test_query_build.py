import pytest

from uiquery.core.conditions import ANY, extra_conditions, merge_conditions
from uiquery.core.failures import NOT_FOUND, NOT_VISIBLE
from uiquery.core.query import Query, build_query
from uiquery.selectors.locator import Locator


class Scope:
    """Stand-in for a page or a previously found element."""


def test_assigns_the_parent_of_the_query():
    parent = Scope()
    query = build_query(parent, Locator.css(".user"), {})
    assert query.parent is parent


def test_builds_the_correct_locator():
    locator = Locator.css(".user")
    query = build_query(Scope(), locator, {})
    assert query.locator == locator


def test_merges_default_conditions():
    query = build_query(Scope(), Locator.css(".user"), {})
    assert query.conditions == {"visible": True, "count": 1}


def test_missing_conditions_get_defaults():
    query = build_query(Scope(), Locator.css(".user"))
    assert query.conditions == {"visible": True, "count": 1}


def test_does_not_override_user_specified_conditions():
    query = build_query(Scope(), Locator.css(".user"), {"visible": False, "count": ANY})
    assert query.conditions == {"visible": False, "count": ANY}


def test_defaults_fill_only_missing_keys():
    query = build_query(Scope(), Locator.link("Home"), {"count": 2, "text": "hi"})
    assert query.conditions == {"visible": True, "count": 2, "text": "hi"}


def test_defaults_to_no_errors_and_no_result():
    query = build_query(Scope(), Locator.css(".user"), {"visible": False, "count": ANY})
    assert query.errors == ()
    assert query.result == ()
    assert query.first_error is None
    assert not query.failed


def test_build_does_not_mutate_user_conditions():
    user = {"visible": False}
    build_query(Scope(), Locator.css(".user"), user)
    assert user == {"visible": False}


def test_with_failure_returns_a_new_query():
    query = build_query(Scope(), Locator.css(".user"))
    failed = query.with_failure(NOT_FOUND).with_failure(NOT_VISIBLE)

    assert query.errors == ()
    assert failed.errors == (NOT_FOUND, NOT_VISIBLE)
    assert failed.first_error == NOT_FOUND
    assert isinstance(failed, Query)


def test_merge_conditions_keeps_unknown_keys():
    assert merge_conditions({"at": 3}) == {"visible": True, "count": 1, "at": 3}


def test_extra_conditions_only_renders_text():
    conditions = {"visible": True, "count": 1, "text": "hello", "at": 3, "label": None}
    assert extra_conditions(conditions) == ["text: 'hello'"]


def test_extra_conditions_drops_non_string_text():
    assert extra_conditions({"visible": True, "count": 1, "text": None}) == []


def test_conditions_are_read_only_and_not_shared():
    user = {"visible": False}
    query = build_query(Scope(), Locator.css(".user"), user)
    failed = query.with_failure(NOT_FOUND)

    with pytest.raises(TypeError):
        failed.conditions["count"] = 5
    user["count"] = 5

    assert query.conditions == {"visible": False, "count": 1}
    assert failed.conditions == {"visible": False, "count": 1}


def test_direct_construction_copies_conditions():
    conditions = {"visible": True, "count": 2}
    query = Query(parent=Scope(), locator=Locator.css(".user"), conditions=conditions)
    conditions["count"] = 3
    assert query.conditions["count"] == 2
