"""Scoped ownership of the shared headless browser.

The pipeline opens one browser for the whole run and hands it to the fetcher;
pages come and go per record, the browser does not.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import Browser, sync_playwright

from heritage.config import settings


@contextmanager
def open_browser(enabled: bool = True) -> Iterator[Optional[Browser]]:
    """Launch headless Chromium for the duration of the ``with`` block.

    Yields ``None`` without starting Playwright when *enabled* is false, so
    static-only runs never pay for a browser.  The browser is closed on every
    exit path, including exceptions raised inside the block.
    """
    if not enabled:
        yield None
        return

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=settings.headless)
        print("[browser] Chromium launched.")
        try:
            yield browser
        finally:
            browser.close()
            print("[browser] Chromium closed.")
