"""Search-result discovery: turn a free-text query into one candidate URL.

Providers:
  1. Google Programmable Search — the Custom Search JSON API scoped to a
     curated engine (``CX``) and authenticated with ``API_KEY``.  Default.
  2. DuckDuckGo — keyless fallback for local experiments
     (``SEARCH_PROVIDER=duckduckgo``).

Every provider asks for exactly one result and returns ``NotFound`` (never
raises) when the search yields nothing or fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx
from duckduckgo_search import DDGS

from heritage.config import settings
from heritage.scraper.models import Discovery, Found, NotFound

_GOOGLE_CSE_ENDPOINT = "https://www.googleapis.com/customsearch/v1"


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class SearchProvider(ABC):
    """Abstract base class for a single search provider."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""

    @abstractmethod
    def first_result(self, query: str) -> Discovery:
        """Return the top hit for *query*.  Must return ``NotFound`` on failure."""


# ---------------------------------------------------------------------------
# Google Programmable Search
# ---------------------------------------------------------------------------

class GoogleSearchProvider(SearchProvider):
    """Google Custom Search JSON API (100 free queries/day per key).

    Skipped with a warning if ``CX`` or ``API_KEY`` is not configured.
    """

    def __init__(self, cx: str | None = None, api_key: str | None = None) -> None:
        self._cx = settings.google_cx if cx is None else cx
        self._api_key = settings.google_api_key if api_key is None else api_key

    @property
    def name(self) -> str:
        return "Google"

    def first_result(self, query: str) -> Discovery:
        if not (self._cx and self._api_key):
            print("[Google] CX / API_KEY not configured; skipping search.")
            return NotFound("search not configured")

        try:
            with httpx.Client(timeout=settings.search_timeout) as client:
                resp = client.get(
                    _GOOGLE_CSE_ENDPOINT,
                    params={"cx": self._cx, "key": self._api_key, "q": query, "num": 1},
                )
                resp.raise_for_status()
                data = resp.json()
        except Exception as exc:
            print(f"[Google] Error fetching Google results: {exc}")
            return NotFound(str(exc))

        items = data.get("items") or []
        link = items[0].get("link") if items else None
        if not link:
            return NotFound("no results")
        return Found(link)


# ---------------------------------------------------------------------------
# DuckDuckGo
# ---------------------------------------------------------------------------

class DuckDuckGoProvider(SearchProvider):
    """Wrapper around ``duckduckgo_search.DDGS``; one attempt, one result."""

    @property
    def name(self) -> str:
        return "DuckDuckGo"

    def first_result(self, query: str) -> Discovery:
        try:
            with DDGS() as ddgs:
                results = ddgs.text(query, max_results=1) or []
        except Exception as exc:
            print(f"[DuckDuckGo] error: {exc}")
            return NotFound(str(exc))

        urls = [r["href"] for r in results if r.get("href")]
        if not urls:
            return NotFound("no results")
        return Found(urls[0])


# ---------------------------------------------------------------------------
# Factory / public API
# ---------------------------------------------------------------------------

_PROVIDERS: dict[str, type[SearchProvider]] = {
    "google": GoogleSearchProvider,
    "duckduckgo": DuckDuckGoProvider,
}


def build_provider(name: str | None = None) -> SearchProvider:
    """Instantiate the provider named by *name* (default ``settings.search_provider``).

    Raises:
        ValueError: If the name is not a known provider.
    """
    key = (name or settings.search_provider).strip().lower()
    try:
        return _PROVIDERS[key]()
    except KeyError:
        raise ValueError(
            f"Unknown search provider {key!r}; expected one of {sorted(_PROVIDERS)}"
        ) from None


def discover(query: str, provider: SearchProvider | None = None) -> Discovery:
    """Look up *query* and return ``Found(url)`` or ``NotFound``."""
    query = query.strip()
    if not query:
        return NotFound("empty query")
    provider = provider or build_provider()
    return provider.first_result(query)
