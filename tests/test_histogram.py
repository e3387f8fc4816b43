import numpy as np
import pytest

from phredstat.config import QcConfig
from phredstat.errors import RecordDecodeError
from phredstat.stats.histogram import PositionTable, QualityAggregator, decode_qualities


def _aggregate(records: list[list[int]]) -> PositionTable:
    agg = QualityAggregator()
    for record in records:
        agg.observe_record(record)
    return agg.finish()


def test_observe_record_counts_each_position() -> None:
    table = _aggregate([[30, 31, 32], [30, 20]])

    assert list(table) == [0, 1, 2]
    assert table[0][30] == 2
    assert table[1][31] == 1
    assert table[1][20] == 1
    assert table[2].sum() == 1
    assert table.records == 2


def test_histogram_sum_matches_records_reaching_position() -> None:
    records = [[40] * n for n in (5, 3, 8, 1)]
    table = _aggregate(records)

    for position, hist in table.items():
        assert hist.sum() == sum(1 for r in records if len(r) > position)
        assert len(hist) == 94


def test_table_grows_past_initial_capacity() -> None:
    table = _aggregate([[35] * 500])

    assert len(table) == 500
    assert table[499][35] == 1


def test_observe_rejects_out_of_alphabet_score() -> None:
    agg = QualityAggregator()
    with pytest.raises(ValueError):
        agg.observe(0, 94)
    with pytest.raises(ValueError):
        agg.observe(0, -1)
    with pytest.raises(ValueError):
        agg.observe(-1, 10)


def test_bad_record_leaves_no_partial_update() -> None:
    agg = QualityAggregator()
    agg.observe_record([10, 11])
    with pytest.raises(ValueError):
        agg.observe_record([10, 11, 200])
    table = agg.finish()

    assert table.records == 1
    assert list(table) == [0, 1]
    assert table[0].sum() == 1


def test_finish_consumes_aggregator() -> None:
    agg = QualityAggregator()
    agg.observe(0, 10)
    agg.finish()

    with pytest.raises(RuntimeError):
        agg.observe(0, 10)
    with pytest.raises(RuntimeError):
        agg.finish()


def test_unobserved_positions_are_absent() -> None:
    agg = QualityAggregator()
    agg.observe(4, 10)
    table = agg.finish()

    assert list(table) == [4]
    assert 0 not in table
    with pytest.raises(KeyError):
        table[0]


def test_returned_histograms_are_read_only() -> None:
    table = _aggregate([[12]])

    with pytest.raises(ValueError):
        table[0][12] = 5


def test_decode_qualities_removes_offset() -> None:
    assert decode_qualities(b"!I~").tolist() == [0, 40, 93]
    assert decode_qualities("II#").tolist() == [40, 40, 2]
    assert decode_qualities("").tolist() == []


@pytest.mark.parametrize("raw", [b"II\x7f", b" II", "Ié"])
def test_decode_qualities_rejects_unencodable_bytes(raw) -> None:
    with pytest.raises(RecordDecodeError):
        decode_qualities(raw)


def test_observe_encoded_honours_offset() -> None:
    agg = QualityAggregator(QcConfig(phred_offset=64))
    agg.observe_encoded(b"h@")
    table = agg.finish()

    assert table[0][40] == 1
    assert table[1][0] == 1


def test_mark_unreadable_is_carried_to_table() -> None:
    agg = QualityAggregator()
    assert not agg.has_unreadable
    agg.mark_unreadable()
    assert agg.has_unreadable

    assert agg.finish().unreadable == 1


def test_aggregation_order_does_not_matter() -> None:
    rng = np.random.default_rng(3)
    batch_a = [rng.integers(0, 94, size=int(rng.integers(1, 60))).tolist() for _ in range(40)]
    batch_b = [rng.integers(0, 94, size=int(rng.integers(1, 90))).tolist() for _ in range(25)]

    forward = _aggregate(batch_a + batch_b)
    backward = _aggregate(batch_b + batch_a)
    merged = _aggregate(batch_a).merge(_aggregate(batch_b))
    merged_reversed = _aggregate(batch_b) + _aggregate(batch_a)

    assert forward == backward == merged == merged_reversed
    for position in forward:
        assert np.array_equal(forward[position], merged[position])


def test_merge_rejects_mismatched_alphabets() -> None:
    with pytest.raises(ValueError):
        PositionTable.empty(94).merge(PositionTable.empty(42))


@pytest.mark.parametrize("position", [1.5, "3", None])
def test_non_integer_position_is_rejected_without_corrupting_state(position) -> None:
    agg = QualityAggregator()
    agg.observe(0, 30)
    with pytest.raises(ValueError):
        agg.observe(position, 30)

    table = agg.finish()

    assert list(table) == [0]
    assert table[0][30] == 1
