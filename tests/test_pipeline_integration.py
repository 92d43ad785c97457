"""End-to-end tests for the parse -> select -> repair -> weight pipeline."""

import pytest

from flowpulse.adapters.repair import ValidatingRepair
from flowpulse.domain.errors import ConfigurationError
from flowpulse.domain.models import FilterConfig, Purpose
from flowpulse.flows.weights import WeightScale
from flowpulse.pipeline import build_flow_view, run_pipeline
from flowpulse.table.parser import parse_table

from .conftest import HEADER


def test_single_record_scenario():
    text = "\n".join(
        [HEADER, '2021,"Boston, MA","Austin, TX",42.36,71.06,30.27,97.74,100,50,150']
    )
    view = run_pipeline(text, FilterConfig.from_values("All", "total"))

    assert len(view.records) == 1
    record = view.records[0]
    assert record.display_value == 150
    assert record.display_type is Purpose.TOTAL
    assert record.origin_name == "Boston, MA"
    assert record.origin_coords == (42.36, -71.06)
    assert record.destination_coords == (30.27, -97.74)

    assert len(view.rendered) == 1
    assert view.rendered[0].display_weight == pytest.approx(0.8)


def test_invalid_coordinates_keep_record_but_skip_rendering(flow_table):
    view = run_pipeline(flow_table, FilterConfig())

    denver = [r for r in view.records if r.origin_name.startswith("Denver")]
    assert len(denver) == 1
    assert denver[0].coordinates is None
    assert denver[0].display_weight is None

    assert len(view.records) == 4
    assert len(view.rendered) == 3
    assert all(r.has_coordinates for r in view.rendered)


def test_top_n_limits_rendered_subset_and_rescales(flow_table):
    view = run_pipeline(flow_table, FilterConfig(), top_n=2)

    assert [r.display_value for r in view.rendered] == [2500, 900]
    assert view.rendered[0].display_weight == pytest.approx(14.0)
    assert view.rendered[1].display_weight == pytest.approx(0.8)


def test_top_n_counts_records_without_coordinates(flow_table):
    # Denver (340) is third by value and has no coordinates.
    view = run_pipeline(flow_table, FilterConfig(), top_n=3)
    assert [r.display_value for r in view.rendered] == [2500, 900]


def test_filters_flow_through(flow_table):
    view = run_pipeline(
        flow_table,
        FilterConfig.from_values("2021", "business", destination_query="miami"),
    )
    assert [(r.origin_name, r.display_value) for r in view.records] == [
        ("New York, NY", 500)
    ]


def test_total_volume_and_counts(flow_table):
    view = run_pipeline(flow_table, FilterConfig())
    assert view.row_count == 4
    assert view.total_volume == 2500 + 900 + 340 + 150
    assert not view.is_empty


def test_empty_text_gives_empty_view():
    view = run_pipeline("", FilterConfig())
    assert view.is_empty
    assert view.rendered == ()
    assert view.row_count == 0


def test_filter_with_no_match_is_empty(flow_table):
    view = run_pipeline(flow_table, FilterConfig(origin_query="Nowhere"))
    assert view.is_empty
    assert view.rendered == ()


def test_runs_are_identical(flow_table):
    filters = FilterConfig.from_values("All", "leisure")
    first = run_pipeline(flow_table, filters, top_n=50)
    second = run_pipeline(flow_table, filters, top_n=50)

    assert first == second
    assert [r.to_dict() for r in first.rendered] == [r.to_dict() for r in second.rendered]


def test_validating_repair_policy(flow_table):
    view = run_pipeline(flow_table, FilterConfig(), repair=ValidatingRepair())
    assert view.records[0].origin_coords == (40.71, 74.01)


def test_custom_scale(flow_table):
    view = run_pipeline(
        flow_table, FilterConfig(), scale=WeightScale(min_weight=1.0, max_weight=2.0)
    )
    weights = [r.display_weight for r in view.rendered]
    assert max(weights) == pytest.approx(2.0)
    assert min(weights) == pytest.approx(1.0)


@pytest.mark.parametrize("top_n", [0, -5, True, "50"])
def test_invalid_top_n_raises(top_n):
    with pytest.raises(ConfigurationError):
        build_flow_view([], FilterConfig(), top_n)


def test_sample_file_pipeline(sample_csv):
    rows = parse_table(sample_csv.read_text(encoding="utf-8"))
    view = build_flow_view(rows, FilterConfig(year=2022), top_n=50)

    assert view.records[0].origin_name == "New York, NY"
    assert all(r.year == 2022 for r in view.records)
    assert all(
        lon <= 0
        for r in view.rendered
        for lon in (r.origin_coords[1], r.destination_coords[1])
    )
    # The Denver -> Salt Lake City row has an empty latitude.
    assert len(view.rendered) == len(view.records) - 1


def test_oversized_digit_cells_degrade_instead_of_raising():
    huge = "9" * 400
    text = "\n".join(
        [
            HEADER,
            f'2021,"Boston, MA","Austin, TX",42.36,71.06,30.27,97.74,100,50,{huge}',
            f'2021,"Chicago, IL","Orlando, FL",41.88,{huge},28.54,81.38,400,100,500',
            "9" * 5000,
        ]
    )
    view = run_pipeline(text, FilterConfig())

    # Total reads as text, so the Boston row has no positive magnitude.
    assert [r.origin_name for r in view.records] == ["Chicago, IL"]
    assert view.records[0].coordinates is None
    assert view.rendered == ()
