"""Content extraction: turns raw HTML into an :class:`ExtractionResult`.

Each :class:`SiteType` owns one rule set.  Rule sets never look at each other's
markup; picking the right one is the fetcher's job.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

import trafilatura
from bs4 import BeautifulSoup, Tag

from heritage.scraper.models import SENTINEL, ExtractionResult, SiteType

_WHITESPACE = re.compile(r"\s+")

# Encyclopedia section titles, tried in this order for the body text.
CONTENT_SECTION = "내용"
HISTORY_SECTION = "변천"
FORM_SECTION = "형태"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _select_text(soup: BeautifulSoup, selector: str) -> str:
    """Concatenated text of every node matching *selector*, trimmed."""
    return "".join(node.get_text() for node in soup.select(selector)).strip()


def _closest(node: Tag, class_name: str) -> Optional[Tag]:
    """Nearest element carrying *class_name*, starting with *node* itself."""
    if class_name in (node.get("class") or []):
        return node
    return node.find_parent(class_=class_name)


def section_text(soup: BeautifulSoup, title: str) -> Optional[str]:
    """Return the body text of the detail section headed by *title*.

    Every ``.section-title`` containing *title* is resolved to its enclosing
    ``.detail-section``; the text of the ``.section-body`` inside is returned
    with newlines and whitespace runs collapsed.  Returns ``None`` when no
    section title matches.
    """
    sections: list[Tag] = []
    for heading in soup.select(".section-title"):
        if title not in heading.get_text():
            continue
        section = _closest(heading, "detail-section")
        # Tag.__eq__ compares markup, not identity
        if section is not None and not any(section is seen for seen in sections):
            sections.append(section)

    if not sections:
        return None

    # A nested matching section shares its bodies with the enclosing one.
    bodies: list[Tag] = []
    for section in sections:
        for body in section.select(".section-body"):
            if not any(body is seen for seen in bodies):
                bodies.append(body)

    return _collapse("".join(body.get_text() for body in bodies))


def _first_text(*candidates: Callable[[], Optional[str]]) -> str:
    for candidate in candidates:
        text = candidate()
        if text:
            return text
    return SENTINEL


def _bs4_fallback(html: str) -> str:
    """Extract readable text using BeautifulSoup ``<main>``/``<article>`` heuristics."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "nav", "footer", "header"]):
        tag.decompose()
    container = soup.find("main") or soup.find("article") or soup.body
    if container is None:
        return soup.get_text(separator=" ", strip=True)
    return container.get_text(separator=" ", strip=True)


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------

def extract_encyclopedia(html: str) -> ExtractionResult:
    """Definition block as summary; first non-empty body section as content."""
    soup = BeautifulSoup(html, "html.parser")
    summary = _select_text(soup, "#cm_def .text-detail") or SENTINEL
    content = _first_text(
        lambda: section_text(soup, CONTENT_SECTION),
        lambda: section_text(soup, HISTORY_SECTION),
        lambda: _select_text(soup, "#cm_smry .text-detail"),
        lambda: section_text(soup, FORM_SECTION),
    )
    return ExtractionResult(summary=summary, content=content)


def extract_portal(html: str) -> ExtractionResult:
    """Title banner as summary; detail-view paragraphs as content."""
    soup = BeautifulSoup(html, "html.parser")
    summary = _select_text(soup, "#contents .titTypeWrap") or SENTINEL
    content = (
        _select_text(soup, "#detailGo .wrap_contView .area_txtView .inr_wrap .inr p")
        or SENTINEL
    )
    return ExtractionResult(summary=summary, content=content)


def extract_article(html: str) -> ExtractionResult:
    """Readability extraction for pages without a dedicated rule set.

    Tries ``trafilatura`` first and falls back to a BeautifulSoup heuristic
    when it returns nothing.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text().strip() if soup.title else ""
    text = trafilatura.extract(
        html,
        include_links=False,
        include_images=False,
        include_tables=True,
        no_fallback=False,
    )
    if not text:
        text = _bs4_fallback(html)
    return ExtractionResult(summary=title or SENTINEL, content=_collapse(text or "") or SENTINEL)


RULE_SETS: dict[SiteType, Callable[[str], ExtractionResult]] = {
    SiteType.ENCYKOREA: extract_encyclopedia,
    SiteType.VISITKOREA: extract_portal,
    SiteType.GENERIC: extract_article,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract(html: str, site_type: SiteType) -> ExtractionResult:
    """Apply the rule set registered for *site_type* to *html*."""
    return RULE_SETS[site_type](html)
