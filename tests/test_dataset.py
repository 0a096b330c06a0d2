import json
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from coastfinder import (
    Candidate,
    CoastlineDataset,
    DatasetCache,
    DatasetLoadError,
    count_intersections,
    load_geojson,
    parse_geojson,
    view_extent,
)


def _collection(*geometries):
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": {}, "geometry": geometry} for geometry in geometries
        ],
    }


def test_parse_linestrings_and_multilinestrings():
    dataset = parse_geojson(
        _collection(
            {"type": "LineString", "coordinates": [[0, 0], [1, 1], [2, 0]]},
            {"type": "MultiLineString", "coordinates": [[[5, 5], [6, 6]], [[7, 7], [8, 9]]]},
            {"type": "Point", "coordinates": [3, 3]},
            None,
        )
    )

    assert len(dataset) == 3
    assert [feature.feature_id for feature in dataset] == ["0", "1.0", "1.1"]
    assert dataset.features[0].bounds == (0.0, 0.0, 2.0, 1.0)
    assert dataset.features[2].bounds == (7.0, 7.0, 8.0, 9.0)
    assert dataset.bounds.shape == (3, 4)


def test_parse_keeps_unusable_geometry_with_nan_bounds():
    dataset = parse_geojson(_collection({"type": "LineString", "coordinates": [[0, 0]]}))
    feature = dataset.features[0]
    assert not feature.is_valid
    assert np.isnan(feature.bounds[0])


def test_parse_drops_altitude_from_positions(default_config):
    dataset = parse_geojson(
        _collection({"type": "LineString", "coordinates": [[0, -50, 0], [0, 50, 12.5]]})
    )
    feature = dataset.features[0]
    assert feature.is_valid
    assert feature.vertices.shape == (2, 2)
    assert feature.bounds == (0.0, -50.0, 0.0, 50.0)

    candidate = Candidate(
        center=(0.0, 0.0), zoom=5.0, rotation=0.0, view_extent=view_extent((0.0, 0.0), 5.0, default_config)
    )
    assert count_intersections(candidate, dataset.features, default_config) == 2


def test_dataset_is_read_only():
    dataset = CoastlineDataset.from_polylines([[(0, 0), (1, 1)]])
    with pytest.raises(ValueError):
        dataset.bounds[0, 0] = 5.0
    with pytest.raises(ValueError):
        dataset.features[0].vertices[0, 0] = 5.0


@pytest.mark.parametrize(
    "payload",
    [[], {"type": "Feature"}, {"type": "FeatureCollection"}, {"type": "FeatureCollection", "features": {}}],
)
def test_parse_rejects_non_collections(payload):
    with pytest.raises(DatasetLoadError):
        parse_geojson(payload)


def test_load_geojson_from_file(geojson_file):
    dataset = load_geojson(geojson_file)
    assert len(dataset) == 721
    assert dataset.name == "coast50.geojson"
    assert dataset.features[0].feature_id == "grid-0"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(DatasetLoadError):
        load_geojson(tmp_path / "missing.geojson")


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.geojson"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetLoadError):
        load_geojson(path)


def test_cache_loads_each_source_once_under_concurrency(tmp_path):
    calls = []
    lock = threading.Lock()

    def _slow_loader(path):
        with lock:
            calls.append(path)
        time.sleep(0.05)
        return CoastlineDataset.from_polylines([[(0, 0), (1, 1)]])

    cache = DatasetCache(loader=_slow_loader)
    source = tmp_path / "coast.geojson"

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.get(source), range(16)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)
    assert source in cache


def test_cache_does_not_remember_failures(tmp_path):
    attempts = []

    def _flaky_loader(path):
        attempts.append(path)
        if len(attempts) == 1:
            raise DatasetLoadError("disk hiccup")
        return CoastlineDataset([])

    cache = DatasetCache(loader=_flaky_loader)
    source = tmp_path / "coast.geojson"

    with pytest.raises(DatasetLoadError):
        cache.get(source)
    assert source not in cache
    assert len(cache.get(source)) == 0
    assert len(attempts) == 2


def test_cache_keys_by_resolved_path(geojson_file, monkeypatch):
    monkeypatch.chdir(geojson_file.parent)
    cache = DatasetCache()
    first = cache.get(geojson_file.name)
    assert cache.get(geojson_file) is first
