"""Tests for route bars, endpoint markers and number formatting."""

from flowpulse.domain.models import (
    CoordinatePair,
    FlowPoint,
    FlowRecord,
    GeoPoint,
    Purpose,
    RouteBar,
)
from flowpulse.flows.summary import format_volume, route_label, top_routes, unique_points


def _flow(origin, dest, value, coords=None):
    return FlowRecord(
        year=2021,
        origin_name=origin,
        destination_name=dest,
        leisure_volume=0.0,
        business_volume=0.0,
        total_volume=value,
        display_value=value,
        display_type=Purpose.TOTAL,
        coordinates=coords,
    )


def _pair(lat_o, lon_o, lat_d, lon_d):
    return CoordinatePair(GeoPoint(lat_o, lon_o), GeoPoint(lat_d, lon_d))


def test_route_label_uses_text_before_comma():
    assert route_label(_flow("Boston, MA", "Austin, TX", 1)) == "Boston → Austin"
    assert route_label(_flow("Reno", "", 1)) == "Reno → "


def test_top_routes_keeps_ranking_and_limit():
    flows = [_flow(f"O{i}", f"D{i}", 100 - i) for i in range(20)]
    bars = top_routes(flows, limit=15)
    assert len(bars) == 15
    assert bars[0] == RouteBar(label="O0 → D0", value=100)


def test_unique_points_dedupes_by_role_and_name():
    flows = [
        _flow("Boston", "Austin", 3, _pair(42.0, -71.0, 30.0, -97.0)),
        _flow("Boston", "Miami", 2, _pair(42.5, -71.5, 25.0, -80.0)),
        _flow("Austin", "Boston", 1, _pair(30.0, -97.0, 42.0, -71.0)),
        _flow("Nowhere", "Austin", 1),
    ]
    points = unique_points(flows)

    assert points == [
        FlowPoint("Boston", (42.5, -71.5)),
        FlowPoint("Austin", (30.0, -97.0)),
        FlowPoint("Miami", (25.0, -80.0)),
        FlowPoint("Austin", (30.0, -97.0)),
        FlowPoint("Boston", (42.0, -71.0)),
    ]


def test_format_volume():
    assert format_volume(1234567.4) == "1,234,567"
    assert format_volume(0) == "0"
