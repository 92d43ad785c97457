"""Tests for the perceptual weight mapping."""

import math

import pytest

from flowpulse.domain.models import FlowRecord, Purpose
from flowpulse.flows.weights import MAX_WEIGHT, MIN_WEIGHT, WeightScale, assign_weights


def _flow(value: float) -> FlowRecord:
    return FlowRecord(
        year=2021,
        origin_name="A",
        destination_name="B",
        leisure_volume=0.0,
        business_volume=0.0,
        total_volume=value,
        display_value=value,
        display_type=Purpose.TOTAL,
    )


def _expected(value: float, low: float, high: float) -> float:
    t = (math.log1p(value) - math.log1p(low)) / (math.log1p(high) - math.log1p(low))
    return MIN_WEIGHT + t**1.15 * (MAX_WEIGHT - MIN_WEIGHT)


def test_weights_follow_log_min_max_formula():
    weighted = assign_weights([_flow(1000), _flow(100), _flow(10)])
    weights = [f.display_weight for f in weighted]

    assert weights[0] == pytest.approx(14.0, abs=1e-6)
    assert weights[1] == pytest.approx(_expected(100, 10, 1000), abs=1e-6)
    assert weights[2] == pytest.approx(0.8, abs=1e-6)


def test_weights_are_relative_to_the_subset():
    full = assign_weights([_flow(1000), _flow(100), _flow(10)])
    subset = assign_weights([_flow(1000), _flow(100)])

    assert subset[1].display_weight == pytest.approx(0.8, abs=1e-6)
    assert full[1].display_weight > subset[1].display_weight


def test_empty_subset_returns_empty():
    assert assign_weights([]) == []


def test_equal_values_do_not_divide_by_zero():
    weighted = assign_weights([_flow(50), _flow(50)])
    assert [f.display_weight for f in weighted] == [
        pytest.approx(0.8),
        pytest.approx(0.8),
    ]


def test_single_record_gets_minimum_weight():
    (only,) = assign_weights([_flow(123)])
    assert only.display_weight == pytest.approx(0.8)


def test_original_records_are_not_mutated():
    flows = [_flow(10), _flow(20)]
    weighted = assign_weights(flows)
    assert all(f.display_weight is None for f in flows)
    assert weighted[0] is not flows[0]


def test_custom_scale():
    scale = WeightScale(min_weight=1.0, max_weight=3.0, exponent=1.0)
    weighted = assign_weights([_flow(0), _flow(99)], scale)
    assert weighted[0].display_weight == pytest.approx(1.0)
    assert weighted[1].display_weight == pytest.approx(3.0)
