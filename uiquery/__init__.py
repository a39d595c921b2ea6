"""
uiquery
-------
Element queries for browser-driven UI tests: build a query from a locator
and expected conditions, evaluate it against the page, and explain exactly
why it failed when it does.
"""

from uiquery.core.classifier import classify, evaluate
from uiquery.core.conditions import ANY, DEFAULT_CONDITIONS, merge_conditions
from uiquery.core.diagnostics import NoFailureRecorded, QueryError, render
from uiquery.core.errors import BadMetadata, ErrorKind, ExpectationNotMet, NoBaseUrl, UIQueryError
from uiquery.core.failures import Failure, FailureKind
from uiquery.core.finder import assert_has, find, has, refute_has
from uiquery.core.navigation import resolve_url, visit
from uiquery.core.query import Query, build_query
from uiquery.selectors.locator import Locator, LocatorStrategy
from uiquery.utils.config import configure, get_settings

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "DEFAULT_CONDITIONS",
    "BadMetadata",
    "ErrorKind",
    "ExpectationNotMet",
    "Failure",
    "FailureKind",
    "Locator",
    "LocatorStrategy",
    "NoBaseUrl",
    "NoFailureRecorded",
    "Query",
    "QueryError",
    "UIQueryError",
    "assert_has",
    "build_query",
    "classify",
    "configure",
    "evaluate",
    "find",
    "get_settings",
    "has",
    "merge_conditions",
    "refute_has",
    "render",
    "resolve_url",
    "visit",
]
