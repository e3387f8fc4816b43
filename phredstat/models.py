"""Core data models for per-position quality statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class FiveNumberSummary:
    """Quartiles and Tukey outlier fences for one position.

    The fences are ``q1 - 1.5 * iqr`` and ``q3 + 1.5 * iqr``. They are not the
    observed extrema and can lie outside the observed score range.
    """

    lower_fence: float
    q1: float
    median: float
    q3: float
    upper_fence: float

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.lower_fence, self.q1, self.median, self.q3, self.upper_fence)


class QualityVerdict(str, Enum):
    """Overall run quality label."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class PositionSummary:
    """Statistics for a single read position."""

    position: int
    count: int
    average: float
    summary: FiveNumberSummary

    def as_pair(self) -> tuple[int, FiveNumberSummary]:
        return (self.position, self.summary)


@dataclass(frozen=True)
class QcResult:
    """Outcome of one pass over a record stream."""

    positions: list[PositionSummary] = field(default_factory=list)
    verdict: QualityVerdict = QualityVerdict.PASS
    records: int = 0
    unreadable: int = 0

    @property
    def invalid_reads(self) -> bool:
        return self.unreadable > 0
