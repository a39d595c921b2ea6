# uiquery/selectors/snapshot.py
from __future__ import annotations

"""Match snapshots
-----------------
Point-in-time view of what a locator matches inside a scope. The classifier
only ever sees these values; `take_snapshot` builds one from a live
Playwright page or locator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from playwright.sync_api import Locator as PWLocator, Page

from uiquery.selectors.locator import (
    CONTROL_SELECTORS,
    LABELLED_STRATEGIES,
    Locator,
    LocatorStrategy,
    css_quote,
    label_selector,
    to_selector,
    untyped_button_selector,
)
from uiquery.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ElementSnapshot:
    """One matched element: an opaque handle plus what the classifier needs."""
    handle: Any
    visible: bool
    text: str = ""
    attributes: Dict[str, Optional[str]] = field(default_factory=dict, compare=False)

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get("id")

    @property
    def type(self) -> Optional[str]:
        return self.attributes.get("type")


@dataclass(frozen=True)
class LabelSnapshot:
    """A <label> whose text matched the locator expression."""
    text: str
    for_attr: Optional[str] = None


@dataclass(frozen=True)
class MatchSnapshot:
    elements: Tuple[ElementSnapshot, ...] = ()
    labels: Tuple[LabelSnapshot, ...] = ()
    candidate_ids: FrozenSet[str] = frozenset()
    untyped_buttons: Tuple[ElementSnapshot, ...] = ()


# ---------- Playwright adapter ----------

def _element(handle: PWLocator) -> ElementSnapshot:
    visible = handle.is_visible()
    return ElementSnapshot(
        handle=handle,
        visible=visible,
        # inner_text is layout-aware and empty for hidden nodes
        text=handle.inner_text() if visible else (handle.text_content() or ""),
        attributes={
            "id": handle.get_attribute("id"),
            "type": handle.get_attribute("type"),
        },
    )


def take_snapshot(scope: Page | PWLocator, locator: Locator) -> MatchSnapshot:
    """
    Collect everything `locator` matches inside `scope` right now.

    Label and untyped-button candidates are only gathered when there are no
    direct matches, since the classifier consults them only in that case.
    """
    matches = scope.locator(to_selector(locator)).all()
    elements = tuple(_element(h) for h in matches)
    if elements:
        return MatchSnapshot(elements=elements)

    labels: Tuple[LabelSnapshot, ...] = ()
    candidate_ids: FrozenSet[str] = frozenset()
    untyped: Tuple[ElementSnapshot, ...] = ()

    if locator.strategy in LABELLED_STRATEGIES:
        labels = tuple(
            LabelSnapshot(text=(h.text_content() or "").strip(), for_attr=h.get_attribute("for"))
            for h in scope.locator(label_selector(locator)).all()
        )
        if labels:
            ids = (h.get_attribute("id") for h in scope.locator(CONTROL_SELECTORS[locator.strategy]).all())
            candidate_ids = frozenset(i for i in ids if i)
            # Labels that do point at a control make it a regular match
            targets = [lb.for_attr for lb in labels if lb.for_attr and lb.for_attr in candidate_ids]
            if targets:
                found = []
                for target in targets:
                    found.extend(scope.locator(f"[id={css_quote(target)}]").all())
                return MatchSnapshot(elements=tuple(_element(h) for h in found))

    elif locator.strategy == LocatorStrategy.button:
        untyped = tuple(_element(h) for h in scope.locator(untyped_button_selector(locator)).all())

    log.debug(
        f"snapshot {locator}: 0 matches, {len(labels)} label(s), {len(untyped)} untyped button(s)"
    )
    return MatchSnapshot(labels=labels, candidate_ids=candidate_ids, untyped_buttons=untyped)
