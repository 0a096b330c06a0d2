"""Coastline datasets: GeoJSON parsing and the process-wide load-once cache."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

import numpy as np

from .types import CoastlineFeature, DatasetLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CoastlineDataset:
    """Immutable collection of coastline polylines for one resolution tier.

    Feature bounding boxes are stacked into one ``(N, 4)`` array so the
    prefilter can test every feature against an extent in a single pass.
    """

    def __init__(self, features: Iterable[CoastlineFeature], name: str = "coastline") -> None:
        self._features = tuple(features)
        self.name = name
        if self._features:
            bounds = np.array([feature.bounds for feature in self._features], dtype=float)
        else:
            bounds = np.empty((0, 4), dtype=float)
        bounds.setflags(write=False)
        self._bounds = bounds

    @property
    def features(self) -> Sequence[CoastlineFeature]:
        return self._features

    @property
    def bounds(self) -> np.ndarray:
        return self._bounds

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[CoastlineFeature]:
        return iter(self._features)

    def __repr__(self) -> str:
        return f"CoastlineDataset(name={self.name!r}, features={len(self._features)})"

    @classmethod
    def from_polylines(
        cls, polylines: Iterable[Sequence[Sequence[float]]], name: str = "coastline"
    ) -> "CoastlineDataset":
        return cls(
            (CoastlineFeature.from_coordinates(coords, feature_id=str(idx)) for idx, coords in enumerate(polylines)),
            name=name,
        )


def _features_from_geometry(
    geometry: Mapping[str, Any], feature_id: str
) -> List[CoastlineFeature]:
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if kind == "LineString":
        return [CoastlineFeature.from_coordinates(coords or [], feature_id=feature_id)]
    if kind == "MultiLineString":
        return [
            CoastlineFeature.from_coordinates(part or [], feature_id=f"{feature_id}.{idx}")
            for idx, part in enumerate(coords or [])
        ]
    logger.debug("Skipping feature %s with geometry type %r", feature_id, kind)
    return []


def parse_geojson(payload: Mapping[str, Any], name: str = "coastline") -> CoastlineDataset:
    """Build a dataset from a parsed GeoJSON ``FeatureCollection``.

    ``LineString`` features become one polyline each and ``MultiLineString``
    features one polyline per part; other geometry types are ignored.
    """

    if not isinstance(payload, Mapping) or payload.get("type") != "FeatureCollection":
        raise DatasetLoadError(f"{name}: expected a GeoJSON FeatureCollection")
    raw_features = payload.get("features")
    if not isinstance(raw_features, list):
        raise DatasetLoadError(f"{name}: FeatureCollection has no 'features' list")

    features: List[CoastlineFeature] = []
    for idx, raw in enumerate(raw_features):
        if not isinstance(raw, Mapping):
            logger.debug("Skipping non-object feature at index %d", idx)
            continue
        geometry = raw.get("geometry")
        if not isinstance(geometry, Mapping):
            continue
        feature_id = str(raw.get("id", idx))
        features.extend(_features_from_geometry(geometry, feature_id))

    dataset = CoastlineDataset(features, name=name)
    invalid = sum(1 for feature in dataset if not feature.is_valid)
    if invalid:
        logger.warning("%s: %d of %d polylines have unusable geometry", name, invalid, len(dataset))
    return dataset


def load_geojson(path: PathLike) -> CoastlineDataset:
    """Read and parse a GeoJSON coastline file."""

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fin:
            payload = json.load(fin)
    except (OSError, ValueError) as exc:
        logger.error("Failed to load coastline data from %s: %s", path, exc)
        raise DatasetLoadError(f"failed to load coastline data from {path}: {exc}") from exc

    dataset = parse_geojson(payload, name=path.name)
    logger.info("Loaded %d coastline features from %s", len(dataset), path)
    return dataset


Loader = Callable[[PathLike], CoastlineDataset]


class DatasetCache:
    """Load-once cache of datasets keyed by source path.

    Concurrent first callers for the same source block on one lock while a
    single load runs; later callers get the cached dataset without locking.
    A failed load is not cached, so a later call retries it.
    """

    def __init__(self, loader: Loader = load_geojson) -> None:
        self._loader = loader
        self._datasets: Dict[str, CoastlineDataset] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(source: PathLike) -> str:
        return str(Path(source).expanduser().resolve())

    def get(self, source: PathLike) -> CoastlineDataset:
        key = self._key(source)
        dataset = self._datasets.get(key)
        if dataset is not None:
            return dataset
        with self._lock:
            dataset = self._datasets.get(key)
            if dataset is None:
                dataset = self._loader(source)
                self._datasets[key] = dataset
        return dataset

    def __contains__(self, source: object) -> bool:
        if not isinstance(source, (str, Path)):
            return False
        return self._key(source) in self._datasets

    def clear(self) -> None:
        with self._lock:
            self._datasets.clear()


_DEFAULT_CACHE: Optional[DatasetCache] = None
_DEFAULT_CACHE_LOCK = threading.Lock()


def get_dataset_cache() -> DatasetCache:
    """Get or create the process-wide dataset cache."""

    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        with _DEFAULT_CACHE_LOCK:
            if _DEFAULT_CACHE is None:
                _DEFAULT_CACHE = DatasetCache()
    return _DEFAULT_CACHE


__all__ = [
    "CoastlineDataset",
    "DatasetCache",
    "get_dataset_cache",
    "load_geojson",
    "parse_geojson",
]
