# uiquery/core/errors.py
from __future__ import annotations

"""Static errors
---------------
Errors whose message is fixed text plus at most one caller-supplied value.
Each kind has exactly one message builder in `error_message`.
"""

import textwrap
from enum import Enum


class ErrorKind(str, Enum):
    expectation_not_met = "expectation_not_met"
    bad_metadata = "bad_metadata"
    no_base_url = "no_base_url"


_NO_BASE_URL = textwrap.dedent(
    """\
    You called visit with {path}, but did not set a base_url.
    Set it once for the whole process, either in the environment / .env file:

      BASE_URL=http://localhost:4001

    or from your test setup (e.g. conftest.py):

      uiquery.configure(base_url="http://localhost:4001")

    If your application server knows its own address, use that instead:

      uiquery.configure(base_url=live_server.url)
    """
)


def error_message(kind: ErrorKind, detail: str) -> str:
    if kind == ErrorKind.no_base_url:
        return _NO_BASE_URL.format(path=detail)
    # expectation_not_met / bad_metadata pass the caller's message through
    return detail


class UIQueryError(Exception):
    """Base class for every uiquery error carrying a static message."""

    kind: ErrorKind

    def __init__(self, detail: str):
        super().__init__(error_message(self.kind, detail))
        self.detail = detail


class ExpectationNotMet(UIQueryError, AssertionError):
    kind = ErrorKind.expectation_not_met


class BadMetadata(UIQueryError):
    kind = ErrorKind.bad_metadata


class NoBaseUrl(UIQueryError):
    kind = ErrorKind.no_base_url

    @property
    def relative_path(self) -> str:
        return self.detail
