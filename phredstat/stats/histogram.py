"""Streaming per-position quality histograms."""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from phredstat.config import ALPHABET_SIZE, PHRED_OFFSET, QcConfig
from phredstat.errors import RecordDecodeError

_MIN_CAPACITY = 64


def decode_qualities(
    raw: bytes | str,
    offset: int = PHRED_OFFSET,
    alphabet_size: int = ALPHABET_SIZE,
) -> np.ndarray:
    """Convert an encoded quality string into integer Phred scores."""

    if isinstance(raw, str):
        try:
            raw = raw.encode("ascii")
        except UnicodeEncodeError as exc:
            raise RecordDecodeError(f"quality string is not ASCII: {exc}") from exc
    scores = np.frombuffer(raw, dtype=np.uint8).astype(np.int64) - offset
    if scores.size and (scores.min() < 0 or scores.max() >= alphabet_size):
        bad = int(scores[(scores < 0) | (scores >= alphabet_size)][0]) + offset
        raise RecordDecodeError(f"quality byte {bad} outside encodable range")
    return scores


class PositionTable:
    """Histograms of quality scores keyed by 0-based read position.

    Only positions with at least one observation are visible; iteration is in
    ascending position order.
    """

    def __init__(self, counts: np.ndarray, *, records: int = 0, unreadable: int = 0) -> None:
        counts = np.asarray(counts, dtype=np.int64)
        if counts.ndim != 2:
            raise ValueError("counts must be a 2-D (positions x alphabet) array")
        if counts.size and counts.min() < 0:
            raise ValueError("histogram counts must be >= 0")
        self._counts = counts
        self.records = int(records)
        self.unreadable = int(unreadable)

    @classmethod
    def empty(cls, alphabet_size: int = ALPHABET_SIZE) -> PositionTable:
        return cls(np.zeros((0, alphabet_size), dtype=np.int64))

    @property
    def alphabet_size(self) -> int:
        return int(self._counts.shape[1])

    def positions(self) -> list[int]:
        return np.flatnonzero(self._counts.sum(axis=1)).tolist()

    def items(self) -> Iterator[tuple[int, np.ndarray]]:
        for position in self.positions():
            yield position, self[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self.positions())

    def __len__(self) -> int:
        return len(self.positions())

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, (int, np.integer)) or position < 0:
            return False
        return position < self._counts.shape[0] and bool(self._counts[position].any())

    def __getitem__(self, position: int) -> np.ndarray:
        if position not in self:
            raise KeyError(position)
        hist = self._counts[position].copy()
        hist.flags.writeable = False
        return hist

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PositionTable):
            return NotImplemented
        return (
            self.alphabet_size == other.alphabet_size
            and self.records == other.records
            and self.unreadable == other.unreadable
            and np.array_equal(self._trimmed(), other._trimmed())
        )

    def __add__(self, other: PositionTable) -> PositionTable:
        if not isinstance(other, PositionTable):
            return NotImplemented
        return self.merge(other)

    def merge(self, other: PositionTable) -> PositionTable:
        """Element-wise sum of two tables. Neither input is modified."""

        if self.alphabet_size != other.alphabet_size:
            raise ValueError(
                f"alphabet size mismatch: {self.alphabet_size} != {other.alphabet_size}"
            )
        rows = max(self._counts.shape[0], other._counts.shape[0])
        merged = np.zeros((rows, self.alphabet_size), dtype=np.int64)
        merged[: self._counts.shape[0]] += self._counts
        merged[: other._counts.shape[0]] += other._counts
        return PositionTable(
            merged,
            records=self.records + other.records,
            unreadable=self.unreadable + other.unreadable,
        )

    def _trimmed(self) -> np.ndarray:
        positions = self.positions()
        end = positions[-1] + 1 if positions else 0
        return self._counts[:end]

    def __repr__(self) -> str:
        return (
            f"PositionTable(positions={len(self)}, records={self.records}, "
            f"unreadable={self.unreadable})"
        )


class QualityAggregator:
    """Accumulates quality-score histograms one record at a time.

    Raw samples are never stored. Each observation increments exactly one
    bucket. Once :meth:`finish` hands the table off, the aggregator refuses
    further use.
    """

    def __init__(self, config: QcConfig | None = None) -> None:
        self._config = config or QcConfig()
        self._counts = np.zeros((_MIN_CAPACITY, self._config.alphabet_size), dtype=np.int64)
        self._length = 0
        self._records = 0
        self._unreadable = 0
        self._finished = False

    @property
    def records(self) -> int:
        return self._records

    @property
    def unreadable(self) -> int:
        return self._unreadable

    @property
    def has_unreadable(self) -> bool:
        return self._unreadable > 0

    def observe(self, position: int, score: int) -> None:
        """Record one (position, score) sample."""

        self._check_open()
        if not isinstance(score, (int, np.integer)):
            raise ValueError(f"quality score must be an integer, got {score!r}")
        if not isinstance(position, (int, np.integer)) or position < 0:
            raise ValueError(f"position must be an integer >= 0, got {position!r}")
        self._check_score(score)
        self._grow(position + 1)
        self._counts[position, score] += 1

    def observe_record(self, qualities: Sequence[int] | np.ndarray) -> None:
        """Record every score of one record at its 0-based offset."""

        self._check_open()
        scores = np.asarray(qualities)
        if scores.ndim != 1:
            raise ValueError("qualities must be one-dimensional")
        if scores.size:
            if not np.issubdtype(scores.dtype, np.integer):
                raise ValueError(f"qualities must be integers, got dtype {scores.dtype}")
            self._check_score(int(scores.min()))
            self._check_score(int(scores.max()))
            self._grow(scores.size)
            self._counts[np.arange(scores.size), scores.astype(np.int64)] += 1
        self._records += 1

    def observe_encoded(self, raw: bytes | str) -> None:
        """Decode a Phred-encoded quality string and record it."""

        self._check_open()
        cfg = self._config
        self.observe_record(decode_qualities(raw, cfg.phred_offset, cfg.alphabet_size))

    def mark_unreadable(self) -> None:
        """Note that one input record was malformed and skipped."""

        self._check_open()
        self._unreadable += 1

    def finish(self) -> PositionTable:
        self._check_open()
        self._finished = True
        table = PositionTable(
            self._counts[: self._length].copy(),
            records=self._records,
            unreadable=self._unreadable,
        )
        self._counts = np.zeros((0, self._config.alphabet_size), dtype=np.int64)
        return table

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("aggregator already finished")

    def _check_score(self, score: int) -> None:
        if not 0 <= score < self._config.alphabet_size:
            raise ValueError(
                f"quality score must be in [0, {self._config.alphabet_size}), got {score}"
            )

    def _grow(self, length: int) -> None:
        capacity = self._counts.shape[0]
        if length > capacity:
            new_capacity = max(length, 2 * capacity)
            grown = np.zeros((new_capacity, self._config.alphabet_size), dtype=np.int64)
            grown[:capacity] = self._counts
            self._counts = grown
        self._length = max(self._length, length)
