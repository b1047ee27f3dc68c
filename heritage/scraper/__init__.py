"""Scraper package — page fetch & site-specific content extraction."""

from heritage.scraper.browser import open_browser
from heritage.scraper.extractor import extract, section_text
from heritage.scraper.fetcher import fetch
from heritage.scraper.models import (
    SENTINEL,
    ExtractionResult,
    FetchError,
    Found,
    InputRecord,
    NotFound,
    OutputRecord,
    SiteType,
)

__all__ = [
    "fetch",
    "extract",
    "section_text",
    "open_browser",
    "SENTINEL",
    "SiteType",
    "ExtractionResult",
    "Found",
    "NotFound",
    "FetchError",
    "InputRecord",
    "OutputRecord",
]
