"""Tests for the shared-browser scope and the pipeline pacer.

Playwright is patched at the ``sync_playwright`` entry point, so no browser
binary is needed.  ``time.sleep`` is patched to keep the pacer tests instant.
"""

from __future__ import annotations

from unittest.mock import call, patch

import pytest

from heritage.pipeline.pacing import Pacer
from heritage.scraper.browser import open_browser


class TestOpenBrowser:
    def test_disabled_yields_none_without_playwright(self) -> None:
        with patch("heritage.scraper.browser.sync_playwright") as mock_pw:
            with open_browser(enabled=False) as browser:
                assert browser is None

        mock_pw.assert_not_called()

    def test_launches_once_and_closes(self) -> None:
        with patch("heritage.scraper.browser.sync_playwright") as mock_pw:
            pw = mock_pw.return_value.__enter__.return_value
            with open_browser() as browser:
                assert browser is pw.chromium.launch.return_value

        pw.chromium.launch.assert_called_once()
        browser.close.assert_called_once()

    def test_closes_when_block_raises(self) -> None:
        with patch("heritage.scraper.browser.sync_playwright") as mock_pw:
            pw = mock_pw.return_value.__enter__.return_value
            with pytest.raises(RuntimeError):
                with open_browser():
                    raise RuntimeError("boom")

        pw.chromium.launch.return_value.close.assert_called_once()


class TestPacer:
    def test_sleeps_interval_on_every_wait(self) -> None:
        pacer = Pacer(3.0)
        with patch("heritage.pipeline.pacing.time.sleep") as mock_sleep:
            pacer.wait()
            pacer.wait()

        assert mock_sleep.call_args_list == [call(3.0), call(3.0)]

    def test_zero_interval_never_sleeps(self) -> None:
        pacer = Pacer(0)
        with patch("heritage.pipeline.pacing.time.sleep") as mock_sleep:
            pacer.wait()

        mock_sleep.assert_not_called()

    def test_default_comes_from_settings(self) -> None:
        with patch("heritage.pipeline.pacing.settings") as mock_settings:
            mock_settings.pacing_delay = 3.0
            assert Pacer().interval == 3.0

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            Pacer(-1)
