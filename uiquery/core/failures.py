# uiquery/core/failures.py
from __future__ import annotations

"""Failure kinds
---------------
Every way a single evaluation of a query can disagree with the page. A query
collects these in detection order; only the first one is ever reported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    not_found = "not_found"                                  # nothing matched
    found = "found"                                          # matched, but absence was expected
    visible = "visible"                                      # visible, but invisible was expected
    not_visible = "not_visible"                              # present, but hidden from the user
    ambiguous = "ambiguous"                                  # matched count != expected count
    label_with_no_for = "label_with_no_for"                  # label found, no for= attribute
    label_does_not_find_field = "label_does_not_find_field"  # label for= points nowhere
    button_with_no_type = "button_with_no_type"              # button found, no type= attribute


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    for_text: Optional[str] = None  # only set for label_does_not_find_field

    def __str__(self) -> str:
        if self.for_text is not None:
            return f"{self.kind.value}({self.for_text!r})"
        return self.kind.value


NOT_FOUND = Failure(FailureKind.not_found)
FOUND = Failure(FailureKind.found)
VISIBLE = Failure(FailureKind.visible)
NOT_VISIBLE = Failure(FailureKind.not_visible)
AMBIGUOUS = Failure(FailureKind.ambiguous)
LABEL_WITH_NO_FOR = Failure(FailureKind.label_with_no_for)
BUTTON_WITH_NO_TYPE = Failure(FailureKind.button_with_no_type)


def label_does_not_find_field(for_text: str) -> Failure:
    return Failure(FailureKind.label_does_not_find_field, for_text=for_text)
