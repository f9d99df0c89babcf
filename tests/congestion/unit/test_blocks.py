import pytest
from datetime import datetime, timedelta
from src.common.exceptions import InvalidInputError
from src.congestion.application.blocks import build_congestion_blocks, whole_minutes
from src.congestion.domain import CongestionLevel, Sample, congestion_weight
from tests.conftest import make_samples

def at(hour, minute):
    return datetime(2024, 5, 2, hour, minute)

def summary(blocks):
    return [(b.level, b.weight, b.start, b.end, b.duration_minutes) for b in blocks]

def test_filtered_blocks_skip_idle_time(scenario_samples):
    blocks = build_congestion_blocks(scenario_samples, skip_idle=True)
    assert summary(blocks) == [
        (CongestionLevel.HIGH, 1, at(9, 1), at(9, 2), 1),
        (CongestionLevel.CRITICAL, 2, at(9, 3), at(9, 3), 0),
        (CongestionLevel.EXTREME, 5, at(9, 5), at(9, 5), 0),
    ]

def test_unfiltered_blocks_partition_range(scenario_samples):
    blocks = build_congestion_blocks(scenario_samples, skip_idle=False)
    assert summary(blocks) == [
        (CongestionLevel.LOW, 0, at(9, 0), at(9, 0), 0),
        (CongestionLevel.HIGH, 1, at(9, 1), at(9, 2), 1),
        (CongestionLevel.CRITICAL, 2, at(9, 3), at(9, 3), 0),
        (CongestionLevel.LOW, 0, at(9, 4), at(9, 4), 0),
        (CongestionLevel.EXTREME, 5, at(9, 5), at(9, 5), 0),
    ]

def test_filtered_is_default():
    samples = make_samples("C1", [0, 6, 0])
    assert summary(build_congestion_blocks(samples)) == [
        (CongestionLevel.CRITICAL, 2, at(9, 1), at(9, 1), 0),
    ]

def test_empty_input_yields_no_blocks():
    assert build_congestion_blocks([], skip_idle=True) == []
    assert build_congestion_blocks([], skip_idle=False) == []

def test_all_idle_samples():
    samples = make_samples("C1", [0, 1, 2, 3, 0])
    assert build_congestion_blocks(samples, skip_idle=True) == []
    blocks = build_congestion_blocks(samples, skip_idle=False)
    assert summary(blocks) == [(CongestionLevel.LOW, 0, at(9, 0), at(9, 4), 4)]

def test_stable_weight_extends_block():
    samples = make_samples("C1", [10, 11, 12, 9], step=timedelta(minutes=5))
    blocks = build_congestion_blocks(samples)
    assert summary(blocks) == [(CongestionLevel.SEVERE, 3, at(9, 0), at(9, 15), 15)]

def test_duplicate_timestamps_are_consecutive_samples():
    ts = at(9, 0)
    samples = [
        Sample("C1", ts, 6),
        Sample("C1", ts, 13),
        Sample("C1", ts + timedelta(minutes=2), 13),
    ]
    blocks = build_congestion_blocks(samples)
    assert summary(blocks) == [
        (CongestionLevel.CRITICAL, 2, ts, ts, 0),
        (CongestionLevel.EXTREME, 5, ts, ts + timedelta(minutes=2), 2),
    ]

def test_partial_minutes_are_truncated():
    samples = make_samples("C1", [6, 6], step=timedelta(seconds=119))
    assert build_congestion_blocks(samples)[0].duration_minutes == 1

def test_out_of_order_samples_are_rejected():
    samples = [Sample("C1", at(9, 5), 6), Sample("C1", at(9, 0), 6)]
    with pytest.raises(InvalidInputError):
        build_congestion_blocks(samples)

def test_mixed_counters_are_rejected():
    samples = [Sample("C1", at(9, 0), 6), Sample("C2", at(9, 1), 6)]
    with pytest.raises(InvalidInputError):
        build_congestion_blocks(samples, skip_idle=False)

def test_coverage_and_sparsity():
    waits = [0, 5, 5, 13, 13, 0, 0, 4, 10, 1, 6, 6, 0, 14]
    samples = make_samples("C1", waits, step=timedelta(minutes=3))
    unfiltered = build_congestion_blocks(samples, skip_idle=False)
    filtered = build_congestion_blocks(samples, skip_idle=True)

    # Unfiltered blocks cover every sample, in order, without overlap
    assert unfiltered[0].start == samples[0].timestamp
    assert unfiltered[-1].end == samples[-1].timestamp
    for previous, block in zip(unfiltered, unfiltered[1:]):
        assert previous.end < block.start
    for sample in samples:
        owners = [b for b in unfiltered if b.start <= sample.timestamp <= b.end]
        assert len(owners) == 1
        assert owners[0].weight == congestion_weight(sample.wait_time_minutes)

    # Filtered blocks never contain an idle sample
    for sample in samples:
        if congestion_weight(sample.wait_time_minutes) == 0:
            assert not any(b.start <= sample.timestamp <= b.end for b in filtered)

    congested = sum(b.duration_minutes for b in unfiltered if b.weight > 0)
    assert sum(b.duration_minutes for b in filtered) <= congested

def test_whole_minutes():
    assert whole_minutes(at(9, 0), at(9, 5)) == 5
    assert whole_minutes(at(9, 0), at(9, 0) + timedelta(seconds=59)) == 0
    assert whole_minutes(at(9, 5), at(9, 0)) == -5
