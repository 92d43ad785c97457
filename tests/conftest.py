"""Shared fixtures for the flow pipeline tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from flowpulse.config import reset_config
from flowpulse.container import reset_container

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

HEADER = (
    "year,origin_name,destination_name,lat_o,lon_o,lat_d,lon_d,"
    "total_wt_l_all,total_wt_b_all,total_wt_t_all"
)


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test sees configuration built from its own environment."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def sample_csv() -> Path:
    return DATA_DIR / "sample_flows.csv"


@pytest.fixture
def flow_table() -> str:
    return "\n".join(
        [
            HEADER,
            '2021,"Boston, MA","Austin, TX",42.36,71.06,30.27,97.74,100,50,150',
            '2021,"New York, NY","Miami, FL",40.71,74.01,25.76,80.19,2000,500,2500',
            '2020,"Chicago, IL","Orlando, FL",41.88,87.63,28.54,81.38,900,0,900',
            '2020,"Denver, CO","Boston, MA",39.74,104.99,,71.06,300,40,340',
        ]
    )
