# uiquery/selectors/locator.py
from __future__ import annotations

from enum import Enum
from typing import Any, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from uiquery.utils.logger import get_logger

log = get_logger(__name__)


class LocatorStrategy(str, Enum):
    css = "css"
    xpath = "xpath"
    fillable_field = "fillable_field"
    checkbox = "checkbox"
    radio_button = "radio_button"
    link = "link"
    button = "button"
    select = "select"


# Strategies whose expression may name a <label> instead of the control itself.
LABELLED_STRATEGIES = frozenset({
    LocatorStrategy.fillable_field,
    LocatorStrategy.checkbox,
    LocatorStrategy.radio_button,
    LocatorStrategy.select,
})


class Locator(BaseModel):
    """
    How to find elements: a strategy plus its raw expression.

    >>> Locator.css(".user")
    Locator(strategy=<LocatorStrategy.css: 'css'>, value='.user')
    """

    model_config = ConfigDict(frozen=True)

    strategy: LocatorStrategy
    value: str = Field(..., description="Selector text or label text, depending on strategy")

    # ---- Constructors ----

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.css, value=value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.xpath, value=value)

    @classmethod
    def fillable_field(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.fillable_field, value=value)

    @classmethod
    def checkbox(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.checkbox, value=value)

    @classmethod
    def radio_button(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.radio_button, value=value)

    @classmethod
    def link(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.link, value=value)

    @classmethod
    def button(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.button, value=value)

    @classmethod
    def select(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.select, value=value)

    @classmethod
    def parse(cls, raw: Union[str, Tuple[str, str], dict, "Locator"]) -> "Locator":
        """
        Accept the notations used by query files and the CLI:

        - "css:.user"                          → css, ".user"
        - "button:Save changes"                → button, "Save changes"
        - ".user"                              → css (no known prefix)
        - ("xpath", "//li")                    → xpath, "//li"
        - {"strategy": "link", "value": "Home"}
        """
        if isinstance(raw, Locator):
            return raw
        if isinstance(raw, dict):
            return cls.model_validate(raw)
        if isinstance(raw, tuple):
            strategy, value = raw
            return cls(strategy=LocatorStrategy(strategy), value=value)

        prefix, sep, rest = raw.partition(":")
        if sep and prefix in LocatorStrategy.__members__:
            return cls(strategy=LocatorStrategy(prefix), value=rest)
        return cls.css(raw)

    def __str__(self) -> str:
        return f"{self.strategy.value}:{self.value}"


# ---------- Method descriptor ----------

_METHODS = {
    LocatorStrategy.css: "element with css",
    LocatorStrategy.select: "select",
    LocatorStrategy.fillable_field: "text input or textarea",
    LocatorStrategy.checkbox: "checkbox",
    LocatorStrategy.radio_button: "radio button",
    LocatorStrategy.link: "link",
    LocatorStrategy.xpath: "element with an xpath",
    LocatorStrategy.button: "button",
}


def method(locator: Any) -> str:
    """Human phrase for the search strategy, used in every diagnostic."""
    return _METHODS.get(getattr(locator, "strategy", None), "element")


def expression(locator: Any) -> str:
    return locator.value


# ---------- Playwright selector translation ----------

_TEXT_INPUT = (
    "input:not([type=checkbox]):not([type=radio]):not([type=submit]):not([type=reset])"
    ":not([type=button]):not([type=image]):not([type=hidden]):not([type=file])"
)
_BUTTON_TYPES = ("submit", "reset", "button", "image")

# Base selectors for every control of a labelled strategy (used to collect candidate ids).
CONTROL_SELECTORS = {
    LocatorStrategy.fillable_field: f"{_TEXT_INPUT}, textarea",
    LocatorStrategy.checkbox: "input[type=checkbox]",
    LocatorStrategy.radio_button: "input[type=radio]",
    LocatorStrategy.select: "select",
}


def css_quote(value: str) -> str:
    """Quote a value for use inside a CSS attribute selector."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _by_id_name_or_placeholder(base: str, value: str, *, placeholder: bool = False) -> str:
    q = css_quote(value)
    attrs = [f"[id={q}]", f"[name={q}]"]
    if placeholder:
        attrs.append(f"[placeholder={q}]")
    return ", ".join(f"{part.strip()}{attr}" for part in base.split(",") for attr in attrs)


def to_selector(locator: Locator) -> str:
    """
    Convert a Locator into a Playwright selector string.

    Labelled strategies match controls by id or name (fillable fields also by
    placeholder); matching through a <label> is the snapshot's job.
    """
    strategy = locator.strategy
    value = locator.value

    if strategy == LocatorStrategy.css:
        return value

    if strategy == LocatorStrategy.xpath:
        return f"xpath={value}"

    if strategy == LocatorStrategy.fillable_field:
        return _by_id_name_or_placeholder(CONTROL_SELECTORS[strategy], value, placeholder=True)

    if strategy in (LocatorStrategy.checkbox, LocatorStrategy.radio_button, LocatorStrategy.select):
        return _by_id_name_or_placeholder(CONTROL_SELECTORS[strategy], value)

    if strategy == LocatorStrategy.link:
        q = css_quote(value)
        return f"a[href]:has-text({q}), a[href][id={q}], a[href][title={q}]"

    if strategy == LocatorStrategy.button:
        q = css_quote(value)
        typed = ", ".join(f"button[type={t}]:has-text({q})" for t in _BUTTON_TYPES)
        inputs = ", ".join(f"input[type={t}][value={q}]" for t in _BUTTON_TYPES)
        return f"{typed}, {inputs}, button[type][id={q}], input[type][id={q}]"

    # Unknown strategy: treat the expression as CSS
    log.debug(f"Unknown locator strategy {strategy!r}, falling back to css for value={value!r}")
    return value


def untyped_button_selector(locator: Locator) -> str:
    """Buttons carrying the expression as text but no type attribute."""
    return f"button:not([type]):has-text({css_quote(locator.value)})"


def label_selector(locator: Locator) -> str:
    return f"label:has-text({css_quote(locator.value)})"
