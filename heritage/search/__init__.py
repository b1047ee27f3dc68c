"""Search package — result discovery."""

from heritage.search.providers import (
    DuckDuckGoProvider,
    GoogleSearchProvider,
    SearchProvider,
    build_provider,
    discover,
)

__all__ = [
    "discover",
    "build_provider",
    "SearchProvider",
    "GoogleSearchProvider",
    "DuckDuckGoProvider",
]
