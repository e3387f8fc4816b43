"""Fan record batches out to worker processes and merge their histograms."""

from __future__ import annotations

import logging
import multiprocessing as mp
from functools import reduce
from typing import Any, Iterable, Sequence

from phredstat.config import QcConfig
from phredstat.errors import RecordDecodeError
from phredstat.stats.histogram import PositionTable, QualityAggregator

_logger = logging.getLogger(__name__)


def aggregate_records(
    records: Iterable[Any],
    *,
    encoded: bool = True,
    config: QcConfig | None = None,
    logger: logging.Logger | None = None,
) -> PositionTable:
    """Fold one stream of records into a :class:`PositionTable`.

    ``None`` records carry no quality data and are skipped silently. Records
    that fail to decode are counted as unreadable and skipped.
    """

    log = logger or _logger
    aggregator = QualityAggregator(config)
    for index, record in enumerate(records):
        if record is None:
            continue
        if not encoded:
            aggregator.observe_record(record)
            continue
        try:
            aggregator.observe_encoded(record)
        except RecordDecodeError as exc:
            log.warning("Skipping unreadable record %d: %s", index, exc)
            aggregator.mark_unreadable()
    return aggregator.finish()


def _worker(args: tuple[list[Any], bool, QcConfig]) -> PositionTable:
    batch, encoded, config = args
    return aggregate_records(batch, encoded=encoded, config=config)


def aggregate_batches(
    batches: Iterable[Sequence[Any]],
    *,
    processes: int | None = None,
    encoded: bool = True,
    config: QcConfig | None = None,
) -> PositionTable:
    """Aggregate each batch independently and merge the resulting tables.

    Histogram counts commute, so the merged table equals a serial pass over
    the concatenated batches. ``processes=1`` stays in the calling process.
    """

    cfg = config or QcConfig()
    if processes is not None and processes < 1:
        raise ValueError("processes must be >= 1")
    jobs = [(list(batch), encoded, cfg) for batch in batches]
    if processes == 1 or len(jobs) <= 1:
        tables = [_worker(job) for job in jobs]
    else:
        ctx = mp.get_context("spawn")
        proc = processes if processes is not None else min(len(jobs), ctx.cpu_count())
        with ctx.Pool(processes=proc) as pool:
            tables = pool.map(_worker, jobs)
    return reduce(PositionTable.merge, tables, PositionTable.empty(cfg.alphabet_size))
