"""Histogram aggregation and order statistics."""

from phredstat.stats.histogram import PositionTable, QualityAggregator, decode_qualities
from phredstat.stats.parallel import aggregate_batches, aggregate_records
from phredstat.stats.quartiles import position_average, summarize, summarize_table

__all__ = [
    "PositionTable",
    "QualityAggregator",
    "aggregate_batches",
    "aggregate_records",
    "decode_qualities",
    "position_average",
    "summarize",
    "summarize_table",
]
