"""Configuration objects and fixed constants for quality statistics."""

from __future__ import annotations

from dataclasses import dataclass

ALPHABET_SIZE = 94
PHRED_OFFSET = 33
FAIL_MEDIAN = 20.0
WARN_MEDIAN = 25.0
FENCE_MULTIPLIER = 1.5
QUARTILES = (0.25, 0.5, 0.75)


@dataclass(frozen=True)
class QcConfig:
    """Quality statistics defaults."""

    alphabet_size: int = ALPHABET_SIZE
    phred_offset: int = PHRED_OFFSET
    fail_median: float = FAIL_MEDIAN
    warn_median: float = WARN_MEDIAN
    fence_multiplier: float = FENCE_MULTIPLIER
