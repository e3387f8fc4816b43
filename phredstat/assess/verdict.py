"""Pass/warn/fail assessment of per-base sequence quality."""

from __future__ import annotations

from typing import Iterable

from phredstat.config import QcConfig
from phredstat.models import FiveNumberSummary, QualityVerdict


def classify(
    summaries: Iterable[tuple[int, FiveNumberSummary]],
    config: QcConfig | None = None,
) -> QualityVerdict:
    """Fold per-position medians into a single verdict.

    Any median at or below ``fail_median`` fails the run; otherwise any median
    at or below ``warn_median`` warns. Fail is absorbing, so the result does
    not depend on position order.
    """

    cfg = config or QcConfig()
    verdict = QualityVerdict.PASS
    for _, summary in summaries:
        if summary.median <= cfg.fail_median:
            verdict = QualityVerdict.FAIL
        elif summary.median <= cfg.warn_median and verdict is not QualityVerdict.FAIL:
            verdict = QualityVerdict.WARN
    return verdict
