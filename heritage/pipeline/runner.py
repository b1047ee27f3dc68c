"""High-level runner for the enrichment pipeline.

``run_enrichment`` walks the input records strictly in order, one at a time:

    pace → discover → fetch + extract → build output row → append

The browser (when the site type needs one) is opened once before the loop and
closed once after it; the accumulated rows are handed to the sink exactly once,
whether the loop finished or blew up half-way.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Optional, Sequence

from playwright.sync_api import Browser

from heritage.pipeline.pacing import Pacer
from heritage.scraper.browser import open_browser
from heritage.scraper.fetcher import fetch
from heritage.scraper.models import InputRecord, NotFound, OutputRecord, SiteType
from heritage.search.providers import SearchProvider, build_provider, discover

Sink = Callable[[list[OutputRecord]], None]


def enrich_record(
    record: InputRecord,
    site_type: SiteType,
    provider: SearchProvider,
    browser: Optional[Browser] = None,
) -> OutputRecord:
    """Discover, fetch and extract for a single record.

    A record whose search finds nothing is not fetched at all; it comes back
    with sentinel fields and status ``not_found``.
    """
    discovery = discover(record.query, provider)
    if isinstance(discovery, NotFound):
        print(f"[pipeline] no source found for {record.query!r} ({discovery.reason})")
        return OutputRecord.build(record, discovery)

    outcome = fetch(discovery.url, site_type, browser)
    return OutputRecord.build(record, outcome, url=discovery.url)


def run_enrichment(
    records: Sequence[InputRecord],
    site_type: SiteType,
    sink: Sink,
    *,
    provider: SearchProvider | None = None,
    pacer: Pacer | None = None,
    progress: Any = None,
    limit: int | None = None,
) -> list[OutputRecord]:
    """Enrich *records* and flush the results to *sink*.

    Args:
        records: Input rows, processed in order.
        site_type: Source family for every record in this run.
        sink: Called once with the output rows (partial on abort).
        provider: Search provider; defaults to ``build_provider()``.
        pacer: Rate limiter; defaults to ``Pacer()`` (``settings.pacing_delay``).
        progress: Optional observer exposing ``update(n)``, advanced by one per
            record.  Its total is set by whoever created it.
        limit: Process only the first *limit* records.

    Returns:
        The output rows, one per processed record, in input order.

    Raises:
        Any unexpected error from inside the loop, after the browser has been
        closed and the partial results flushed.
    """
    provider = provider or build_provider()
    pacer = pacer or Pacer()
    if limit is not None:
        records = list(records)[:limit]

    results: list[OutputRecord] = []
    try:
        with open_browser(site_type.rendered) as browser:
            for record in records:
                pacer.wait()
                results.append(enrich_record(record, site_type, provider, browser))
                if progress is not None:
                    progress.update(1)
    except Exception as exc:
        print(f"[pipeline] run aborted after {len(results)} record(s): {exc!r}")
        raise
    finally:
        sink(results)

    tally = Counter(row.status for row in results)
    print(
        f"[DONE] {len(results)} record(s): {tally['ok']} enriched, "
        f"{tally['not_found']} not found, {tally['fetch_error']} fetch error(s)."
    )
    return results
