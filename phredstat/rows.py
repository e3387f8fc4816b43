"""Shape position summaries into plot-ready rows."""

from __future__ import annotations

from typing import Any, Iterable

from phredstat.models import PositionSummary

ROW_KEYS = ["pos", "average", "lower_fence", "q1", "median", "q3", "upper_fence"]


def per_position_rows(positions: Iterable[PositionSummary]) -> list[dict[str, Any]]:
    """One box-plot row per position, sorted by position.

    Fence keys are named as fences; they are not observed minima/maxima.
    """

    rows = []
    for item in sorted(positions, key=lambda p: p.position):
        s = item.summary
        rows.append(
            {
                "pos": item.position,
                "average": item.average,
                "lower_fence": s.lower_fence,
                "q1": s.q1,
                "median": s.median,
                "q3": s.q3,
                "upper_fence": s.upper_fence,
            }
        )
    return rows
