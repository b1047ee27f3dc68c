"""Pipeline package — per-record orchestration and pacing."""

from heritage.pipeline.pacing import Pacer
from heritage.pipeline.runner import enrich_record, run_enrichment

__all__ = ["run_enrichment", "enrich_record", "Pacer"]
