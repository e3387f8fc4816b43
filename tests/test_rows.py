from phredstat.models import FiveNumberSummary, PositionSummary
from phredstat.rows import ROW_KEYS, per_position_rows


def test_rows_are_sorted_and_use_fence_names() -> None:
    summaries = [
        PositionSummary(3, 4, 30.5, FiveNumberSummary(20.0, 28.0, 30.0, 33.0, 40.5)),
        PositionSummary(1, 4, 35.0, FiveNumberSummary(30.0, 34.0, 35.0, 36.0, 39.0)),
    ]

    rows = per_position_rows(summaries)

    assert [row["pos"] for row in rows] == [1, 3]
    assert list(rows[0]) == ROW_KEYS
    assert rows[1]["lower_fence"] == 20.0
    assert rows[1]["upper_fence"] == 40.5
    assert not any("min" in key or "max" in key for key in ROW_KEYS)
