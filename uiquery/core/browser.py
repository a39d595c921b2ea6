# uiquery/core/browser.py
from __future__ import annotations

"""Browser helper
----------------
Just enough Playwright lifecycle for the CLI: one browser, one context,
one page, all closed on exit.
"""

import contextlib
from typing import Iterator, Optional

from playwright.sync_api import Page, sync_playwright

from uiquery.utils.config import BrowserType, Settings, get_settings
from uiquery.utils.logger import get_logger

log = get_logger(__name__)


@contextlib.contextmanager
def open_page(settings: Optional[Settings] = None) -> Iterator[Page]:
    s = settings or get_settings()
    with sync_playwright() as p:
        browser_type = {
            BrowserType.chromium: p.chromium,
            BrowserType.firefox: p.firefox,
            BrowserType.webkit: p.webkit,
        }[s.BROWSER_TYPE]
        log.debug(f"launching {s.BROWSER_TYPE.value} (headless={s.HEADLESS})")
        browser = browser_type.launch(**s.playwright_launch_kwargs())
        try:
            context = browser.new_context(**s.playwright_context_kwargs())
            yield context.new_page()
        finally:
            browser.close()
