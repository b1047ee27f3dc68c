"""Page fetching: plain HTTP for static sites, headless Chromium for JS portals."""

from __future__ import annotations

from typing import Callable, Optional

import httpx
from playwright.sync_api import Browser
from playwright.sync_api import Error as PlaywrightError

from heritage.config import settings
from heritage.scraper.extractor import extract
from heritage.scraper.models import FetchError, FetchOutcome, SiteType

# Some source sites reject default client signatures.
_BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

_DEFAULT_HEADERS = {"User-Agent": _BROWSER_UA}


# ---------------------------------------------------------------------------
# Strategies — each returns the page HTML or raises
# ---------------------------------------------------------------------------

def fetch_static(url: str, browser: Optional[Browser] = None) -> str:
    """GET *url* over HTTP and return the response body.

    Raises:
        httpx.HTTPError: On transport failure or a 4xx/5xx status code.
    """
    with httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def fetch_rendered(url: str, browser: Optional[Browser] = None) -> str:
    """Render *url* in a fresh tab of *browser* and return the final HTML.

    Navigation waits for network activity to settle and gives up after
    ``settings.render_timeout`` seconds.  The tab is closed on every path.

    Raises:
        playwright.sync_api.Error: On navigation failure or timeout.
    """
    page = browser.new_page()
    try:
        page.goto(
            url,
            timeout=int(settings.render_timeout * 1000),
            wait_until="networkidle",
        )
        return page.content()
    finally:
        page.close()


STRATEGIES: dict[SiteType, Callable[[str, Optional[Browser]], str]] = {
    SiteType.ENCYKOREA: fetch_static,
    SiteType.VISITKOREA: fetch_rendered,
    SiteType.GENERIC: fetch_static,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch(url: str, site_type: SiteType, browser: Optional[Browser] = None) -> FetchOutcome:
    """Fetch *url* with the strategy for *site_type* and extract its content.

    Transport, navigation and timeout failures are reported and returned as a
    :class:`FetchError` so one bad page never stops a run.  Rendered site types
    need the caller's *browser*; the fetcher never launches or closes it.
    """
    if site_type.rendered and browser is None:
        return FetchError(f"no browser available to render {site_type.value} page")

    strategy = STRATEGIES[site_type]
    try:
        html = strategy(url, browser)
    except (httpx.HTTPError, PlaywrightError) as exc:
        print(f"[fetch] {url}: {exc}")
        return FetchError(str(exc) or type(exc).__name__)

    return extract(html, site_type)
