"""Per-position base-call quality statistics."""

from phredstat.assess import classify
from phredstat.config import QcConfig
from phredstat.errors import RecordDecodeError
from phredstat.models import FiveNumberSummary, PositionSummary, QcResult, QualityVerdict
from phredstat.pipeline import run_quality_stats
from phredstat.stats import PositionTable, QualityAggregator, aggregate_batches, summarize

__all__ = [
    "FiveNumberSummary",
    "PositionSummary",
    "PositionTable",
    "QcConfig",
    "QcResult",
    "QualityAggregator",
    "QualityVerdict",
    "RecordDecodeError",
    "aggregate_batches",
    "classify",
    "run_quality_stats",
    "summarize",
]
