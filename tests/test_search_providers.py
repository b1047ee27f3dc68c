"""Unit tests for heritage.search.providers.

All network calls are mocked via ``unittest.mock``.  No real HTTP connections
are made; the tests validate request shape, response parsing, and the
"never raise, return NotFound" contract.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from heritage.scraper.models import Found, NotFound
from heritage.search.providers import (
    DuckDuckGoProvider,
    GoogleSearchProvider,
    SearchProvider,
    build_provider,
    discover,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _mock_httpx_response(json_data: dict, status_code: int = 200) -> MagicMock:
    """Build a mock httpx.Response-like object."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.raise_for_status = MagicMock()  # no-op by default
    return resp


def _patched_client(mock_client_cls: MagicMock, resp: MagicMock) -> MagicMock:
    ctx = MagicMock()
    ctx.__enter__ = MagicMock(return_value=ctx)
    ctx.__exit__ = MagicMock(return_value=False)
    ctx.get.return_value = resp
    mock_client_cls.return_value = ctx
    return ctx


class _StubProvider(SearchProvider):
    def __init__(self, result) -> None:
        self.result = result
        self.queries: list[str] = []

    @property
    def name(self) -> str:
        return "Stub"

    def first_result(self, query: str):
        self.queries.append(query)
        return self.result


# ===========================================================================
# GoogleSearchProvider
# ===========================================================================

class TestGoogleSearchProvider:
    def test_returns_first_link(self):
        resp = _mock_httpx_response(
            {"items": [{"link": "https://encykorea.aks.ac.kr/Article/E0025157"}]}
        )
        with patch("heritage.search.providers.httpx.Client") as mock_client_cls:
            ctx = _patched_client(mock_client_cls, resp)
            result = GoogleSearchProvider(cx="engine", api_key="secret").first_result(
                "경주시 불국사"
            )

        assert result == Found("https://encykorea.aks.ac.kr/Article/E0025157")
        params = ctx.get.call_args.kwargs["params"]
        assert params == {"cx": "engine", "key": "secret", "q": "경주시 불국사", "num": 1}

    def test_zero_results_is_not_found(self):
        resp = _mock_httpx_response({"searchInformation": {"totalResults": "0"}})
        with patch("heritage.search.providers.httpx.Client") as mock_client_cls:
            _patched_client(mock_client_cls, resp)
            result = GoogleSearchProvider(cx="engine", api_key="secret").first_result("x")

        assert isinstance(result, NotFound)

    def test_quota_error_is_not_found(self, capsys):
        resp = _mock_httpx_response({}, status_code=429)
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "429 Too Many Requests", request=MagicMock(), response=MagicMock()
        )
        with patch("heritage.search.providers.httpx.Client") as mock_client_cls:
            _patched_client(mock_client_cls, resp)
            result = GoogleSearchProvider(cx="engine", api_key="secret").first_result("x")

        assert isinstance(result, NotFound)
        assert "429" in result.reason
        assert "[Google]" in capsys.readouterr().out

    def test_network_error_is_not_found(self):
        with patch("heritage.search.providers.httpx.Client") as mock_client_cls:
            ctx = _patched_client(mock_client_cls, MagicMock())
            ctx.get.side_effect = httpx.ConnectError("unreachable")
            result = GoogleSearchProvider(cx="engine", api_key="secret").first_result("x")

        assert result == NotFound("unreachable")

    def test_skipped_without_credentials(self):
        with patch("heritage.search.providers.httpx.Client") as mock_client_cls:
            result = GoogleSearchProvider(cx="", api_key="").first_result("x")

        assert isinstance(result, NotFound)
        mock_client_cls.assert_not_called()

    def test_reads_credentials_from_settings(self):
        with patch("heritage.search.providers.settings") as mock_settings:
            mock_settings.google_cx = "cx-from-env"
            mock_settings.google_api_key = "key-from-env"
            provider = GoogleSearchProvider()

        assert provider._cx == "cx-from-env"
        assert provider._api_key == "key-from-env"


# ===========================================================================
# DuckDuckGoProvider
# ===========================================================================

class TestDuckDuckGoProvider:
    def test_returns_first_href(self):
        with patch("heritage.search.providers.DDGS") as mock_ddgs_cls:
            ddgs = mock_ddgs_cls.return_value.__enter__.return_value
            ddgs.text.return_value = [{"href": "https://example.com/bulguksa"}]
            result = DuckDuckGoProvider().first_result("불국사")

        assert result == Found("https://example.com/bulguksa")
        ddgs.text.assert_called_once_with("불국사", max_results=1)

    def test_empty_results_is_not_found(self):
        with patch("heritage.search.providers.DDGS") as mock_ddgs_cls:
            mock_ddgs_cls.return_value.__enter__.return_value.text.return_value = []
            result = DuckDuckGoProvider().first_result("nothing")

        assert isinstance(result, NotFound)

    def test_search_exception_is_not_found(self):
        from duckduckgo_search.exceptions import RatelimitException

        with patch("heritage.search.providers.DDGS") as mock_ddgs_cls:
            mock_ddgs_cls.return_value.__enter__.return_value.text.side_effect = (
                RatelimitException("202 Ratelimit")
            )
            result = DuckDuckGoProvider().first_result("x")

        assert isinstance(result, NotFound)

    def test_unexpected_error_is_not_found(self, capsys):
        with patch("heritage.search.providers.DDGS") as mock_ddgs_cls:
            mock_ddgs_cls.return_value.__enter__.side_effect = RuntimeError("session closed")
            result = DuckDuckGoProvider().first_result("x")

        assert result == NotFound("session closed")
        assert "[DuckDuckGo] error: session closed" in capsys.readouterr().out


# ===========================================================================
# build_provider / discover
# ===========================================================================

class TestBuildProvider:
    def test_google_is_default(self):
        with patch("heritage.search.providers.settings") as mock_settings:
            mock_settings.search_provider = "google"
            assert isinstance(build_provider(), GoogleSearchProvider)

    def test_named_provider(self):
        assert isinstance(build_provider("DuckDuckGo"), DuckDuckGoProvider)

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown search provider"):
            build_provider("altavista")


class TestDiscover:
    def test_delegates_to_provider(self):
        stub = _StubProvider(Found("https://example.com"))
        assert discover("  경주시 불국사  ", stub) == Found("https://example.com")
        assert stub.queries == ["경주시 불국사"]

    def test_blank_query_skips_provider(self):
        stub = _StubProvider(Found("https://example.com"))
        result = discover("   ", stub)

        assert isinstance(result, NotFound)
        assert stub.queries == []
