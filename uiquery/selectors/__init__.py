"""
Selectors package
-----------------
The Locator value type, its human-readable method phrases, and the
translation of locators into Playwright selectors and match snapshots.
"""

from .locator import Locator, LocatorStrategy, method, expression, to_selector
from .snapshot import ElementSnapshot, LabelSnapshot, MatchSnapshot, take_snapshot

__all__ = [
    "Locator",
    "LocatorStrategy",
    "method",
    "expression",
    "to_selector",
    "ElementSnapshot",
    "LabelSnapshot",
    "MatchSnapshot",
    "take_snapshot",
]
