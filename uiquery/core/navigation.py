# uiquery/core/navigation.py
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from playwright.sync_api import Page

from uiquery.core.errors import NoBaseUrl
from uiquery.utils.config import Settings, get_settings
from uiquery.utils.logger import get_logger

log = get_logger(__name__)


_ABSOLUTE_SCHEMES = frozenset({"http", "https", "file", "about", "data"})


def _is_absolute(url: str) -> bool:
    return urlsplit(url).scheme.lower() in _ABSOLUTE_SCHEMES


def resolve_url(path: str, base_url: Optional[str] = None) -> str:
    """
    Absolute URLs pass through; relative paths are joined onto `base_url`
    (or the configured BASE_URL). A scheme-relative target such as
    ``//cdn.example.com/x`` takes the base URL's scheme, as a browser would.

    Raises:
        NoBaseUrl if `path` is relative and no base URL is configured.
    """
    path = path.strip()
    if _is_absolute(path):
        return path

    base = base_url if base_url is not None else get_settings().BASE_URL
    if not base:
        raise NoBaseUrl(path)
    if path.startswith("//"):
        return f"{urlsplit(base).scheme or 'http'}:{path}"
    return base.rstrip("/") + "/" + path.lstrip("/")


def visit(page: Page, path: str, settings: Optional[Settings] = None) -> str:
    """Navigate `page` to `path`, returning the URL actually visited."""
    s = settings or get_settings()
    url = resolve_url(path, base_url=s.BASE_URL or "")
    log.debug(f"visit {url}")
    page.goto(url, wait_until="domcontentloaded", timeout=s.PAGE_LOAD_TIMEOUT)
    return url
