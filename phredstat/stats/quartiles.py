"""Exact quartiles and Tukey fences computed from score histograms.

A histogram is a compressed form of the full sample population, so ranks can
be located by walking cumulative counts instead of sorting samples. The
result matches sorting every sample and interpolating linearly between the
two order statistics around rank ``p * (total - 1)``, at O(alphabet) cost.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from phredstat.config import QUARTILES, QcConfig
from phredstat.models import FiveNumberSummary, PositionSummary
from phredstat.stats.histogram import PositionTable


def summarize(histogram: Sequence[int] | np.ndarray, config: QcConfig | None = None) -> FiveNumberSummary:
    """Return fences and quartiles for one position histogram."""

    cfg = config or QcConfig()
    hist = _as_histogram(histogram)
    total = int(hist.sum())
    if total < 1:
        raise ValueError("histogram must contain at least one observation")

    scores = np.flatnonzero(hist)
    if total == 1:
        value = float(scores[0])
        return FiveNumberSummary(value, value, value, value, value)

    score_list = scores.tolist()
    count_list = hist[scores].tolist()
    q1, median, q3 = (_quantile(score_list, count_list, total, p) for p in QUARTILES)
    iqr = q3 - q1
    return FiveNumberSummary(
        lower_fence=q1 - cfg.fence_multiplier * iqr,
        q1=q1,
        median=median,
        q3=q3,
        upper_fence=q3 + cfg.fence_multiplier * iqr,
    )


def position_average(histogram: Sequence[int] | np.ndarray) -> float:
    """Mean score of a histogram."""

    hist = _as_histogram(histogram)
    total = int(hist.sum())
    if total < 1:
        raise ValueError("histogram must contain at least one observation")
    weighted = int(np.dot(np.arange(hist.size, dtype=np.int64), hist))
    return weighted / total


def summarize_table(table: PositionTable, config: QcConfig | None = None) -> list[PositionSummary]:
    """Summaries for every observed position, ascending."""

    cfg = config or QcConfig()
    out: list[PositionSummary] = []
    for position, hist in table.items():
        out.append(
            PositionSummary(
                position=position,
                count=int(hist.sum()),
                average=position_average(hist),
                summary=summarize(hist, cfg),
            )
        )
    return out


def _quantile(scores: list[int], counts: list[int], total: int, p: float) -> float:
    rank = p * (total - 1)
    floor_rank = math.floor(rank)
    delta = rank - floor_rank
    n = int(floor_rank) + 1
    acc = 0
    lo: int | None = None
    for hi, count in zip(scores, counts):
        if acc == n and lo is not None:
            return lo + (hi - lo) * delta
        if acc + count > n:
            return float(hi)
        acc += count
        lo = hi
    # n <= floor(0.75 * (total - 1)) + 1 < total, so some bucket always matches.
    raise AssertionError(f"rank {n} not reached in histogram of {total} samples")


def _as_histogram(histogram: Sequence[int] | np.ndarray) -> np.ndarray:
    hist = np.asarray(histogram)
    if hist.ndim != 1:
        raise ValueError("histogram must be one-dimensional")
    if hist.size and not np.issubdtype(hist.dtype, np.integer):
        raise ValueError(f"histogram counts must be integers, got dtype {hist.dtype}")
    hist = hist.astype(np.int64)
    if hist.size and hist.min() < 0:
        raise ValueError("histogram counts must be >= 0")
    return hist
