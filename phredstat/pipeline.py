"""End-to-end quality statistics over a record stream."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from phredstat.assess.verdict import classify
from phredstat.config import QcConfig
from phredstat.models import QcResult
from phredstat.stats.histogram import PositionTable
from phredstat.stats.parallel import aggregate_records
from phredstat.stats.quartiles import summarize_table

_logger = logging.getLogger(__name__)


def run_quality_stats(
    records: Iterable[Any],
    *,
    config: QcConfig | None = None,
    encoded: bool = True,
    logger: logging.Logger | None = None,
) -> QcResult:
    """Aggregate ``records`` and summarise every observed position.

    With ``encoded=True`` each record is a Phred-encoded quality string
    (``bytes`` or ``str``); otherwise each record is a sequence of integer
    scores. ``None`` marks a record without quality data.
    """

    cfg = config or QcConfig()
    log = logger or _logger
    table = aggregate_records(records, encoded=encoded, config=cfg, logger=log)
    return result_from_table(table, config=cfg, logger=log)


def result_from_table(
    table: PositionTable,
    *,
    config: QcConfig | None = None,
    logger: logging.Logger | None = None,
) -> QcResult:
    """Summarise an already aggregated table and classify it."""

    cfg = config or QcConfig()
    log = logger or _logger
    positions = summarize_table(table, cfg)
    verdict = classify((p.as_pair() for p in positions), cfg)
    log.debug("Summarised %d positions", len(positions))
    if table.unreadable:
        log.warning("%d of %d records were unreadable", table.unreadable, table.records + table.unreadable)
    log.info("Per-base quality %s over %d records", verdict.value, table.records)
    return QcResult(
        positions=positions,
        verdict=verdict,
        records=table.records,
        unreadable=table.unreadable,
    )
