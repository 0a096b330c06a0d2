"""Shared fixtures: synthetic coastline datasets."""
import json
import sys

import numpy as np
import pytest

from coastfinder import CoastlineDataset, SearchConfig


def vertical_grid(spacing: float = 0.5) -> CoastlineDataset:
    """Meridian-like lines dense enough that every frame has one crossing top and bottom."""

    lons = np.arange(-180.0, 180.0 + spacing, spacing)
    return CoastlineDataset.from_polylines(
        [[(lon, -200.0), (lon, 200.0)] for lon in lons], name="grid"
    )


@pytest.fixture
def default_config():
    return SearchConfig()


@pytest.fixture
def grid_dataset():
    return vertical_grid()


@pytest.fixture
def empty_dataset():
    return CoastlineDataset([], name="empty")


@pytest.fixture
def geojson_file(tmp_path):
    """Small GeoJSON coastline file on disk."""

    payload = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "grid-%d" % idx,
                "properties": {},
                "geometry": {"type": "LineString", "coordinates": [[lon, -200.0], [lon, 200.0]]},
            }
            for idx, lon in enumerate(np.arange(-180.0, 180.5, 0.5).tolist())
        ],
    }
    path = tmp_path / "coast50.geojson"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def grid_factory():
    return vertical_grid


@pytest.fixture
def int_digit_limit():
    """Pin the interpreter's int/str conversion limit for the duration of a test."""

    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no int string conversion limit")
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous)
