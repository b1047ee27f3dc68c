"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

SENTINEL = "No content found."


class SiteType(str, Enum):
    """Source family: picks both the fetch strategy and the extraction rules."""

    ENCYKOREA = "encykorea"
    VISITKOREA = "visitkorea"
    GENERIC = "generic"

    @property
    def rendered(self) -> bool:
        """``True`` when pages of this type need a headless browser."""
        return self is SiteType.VISITKOREA


@dataclass(frozen=True)
class ExtractionResult:
    """Summary and body text pulled from one page."""

    summary: str = SENTINEL
    content: str = SENTINEL


@dataclass(frozen=True)
class Found:
    url: str


@dataclass(frozen=True)
class NotFound:
    reason: str = ""


@dataclass(frozen=True)
class FetchError:
    message: str


Discovery = Union[Found, NotFound]
FetchOutcome = Union[ExtractionResult, FetchError]


@dataclass(frozen=True)
class InputRecord:
    """One row of the input dataset.

    ``fields`` keeps every column of the row (read-only); ``name`` and
    ``location`` are the two the pipeline actually queries with.
    """

    name: str
    location: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def query(self) -> str:
        return f"{self.location} {self.name}".strip()


@dataclass
class OutputRecord:
    """An enriched row, ready to be written to the output sheet."""

    name: str
    location: str
    summary: str = SENTINEL
    content: str = SENTINEL
    status: str = "ok"
    url: str = ""

    @classmethod
    def build(cls, record: InputRecord, outcome: Discovery | FetchOutcome, url: str = "") -> OutputRecord:
        """Merge *record* with whatever the discovery/fetch step produced."""
        if isinstance(outcome, ExtractionResult):
            return cls(record.name, record.location, outcome.summary, outcome.content, "ok", url)
        status = "not_found" if isinstance(outcome, NotFound) else "fetch_error"
        return cls(record.name, record.location, status=status, url=url)

    def to_row(self, with_source: bool = False) -> dict[str, str]:
        row = {
            "Name": self.name,
            "Location": self.location,
            "Summary": self.summary,
            "Content": self.content,
        }
        if with_source:
            row["URL"] = self.url
            row["Status"] = self.status
        return row
