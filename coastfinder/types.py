"""Core data structures shared by the search pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Tuple

import numpy as np

LonLat = Tuple[float, float]
Extent = Tuple[float, float, float, float]
EdgeSegment = Tuple[LonLat, LonLat]
SearchStatus = Literal["accepted", "fallback"]

_NAN_EXTENT: Extent = (math.nan, math.nan, math.nan, math.nan)


class CoastfinderError(Exception):
    """Base class for errors raised by the package."""


class DatasetLoadError(CoastfinderError, RuntimeError):
    """Raised when coastline data cannot be read or parsed."""


class GeometryError(CoastfinderError, ValueError):
    """Raised when a feature geometry cannot take part in an intersection test."""


class InvalidSeedError(CoastfinderError, ValueError):
    """Raised when a seed value supplied from outside is not an integer."""


@dataclass(frozen=True)
class Location:
    """Viewport returned across the service boundary."""

    center: LonLat
    zoom: float
    rotation: float
    seed: int

    def __post_init__(self) -> None:
        lon, lat = self.center
        object.__setattr__(self, "center", (float(lon), float(lat)))
        object.__setattr__(self, "zoom", float(self.zoom))
        object.__setattr__(self, "rotation", float(self.rotation))
        object.__setattr__(self, "seed", int(self.seed))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": [self.center[0], self.center[1]],
            "zoom": self.zoom,
            "rotation": self.rotation,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Location":
        """Build a location from its JSON form.

        Raises ``ValueError`` (or ``KeyError``/``TypeError``) when the payload
        does not have the ``center``/``zoom``/``rotation``/``seed`` shape.
        """

        center = payload["center"]
        if not isinstance(center, (list, tuple)) or len(center) != 2:
            raise ValueError(f"center must be a [lon, lat] pair, got {center!r}")
        seed = payload["seed"]
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise ValueError(f"seed must be an integer, got {seed!r}")
        return cls(
            center=(float(center[0]), float(center[1])),
            zoom=float(payload["zoom"]),
            rotation=float(payload["rotation"]),
            seed=seed,
        )


@dataclass(frozen=True)
class Candidate:
    """One proposed viewport under evaluation."""

    center: LonLat
    zoom: float
    rotation: float
    view_extent: Extent

    def to_location(self, seed: int) -> Location:
        return Location(center=self.center, zoom=self.zoom, rotation=self.rotation, seed=seed)


def _vertex_bounds(vertices: np.ndarray) -> Extent:
    if vertices.ndim != 2 or vertices.shape[0] < 2 or vertices.shape[1] != 2:
        return _NAN_EXTENT
    if not np.all(np.isfinite(vertices)):
        return _NAN_EXTENT
    min_x, min_y = vertices.min(axis=0)
    max_x, max_y = vertices.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)


@dataclass(frozen=True, eq=False)
class CoastlineFeature:
    """Polyline segment of coastline with its bounding box.

    ``vertices`` is stored as a read-only float array. Geometry that cannot be
    used (wrong shape, fewer than two vertices, non-finite values) is kept
    as-is and gets a NaN bounding box; the intersection predicates reject it
    later.
    """

    vertices: np.ndarray
    bounds: Extent = field(init=False)
    feature_id: Optional[str] = None

    def __post_init__(self) -> None:
        vertices = np.array(self.vertices, dtype=float)
        vertices.setflags(write=False)
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "bounds", _vertex_bounds(vertices))

    @classmethod
    def from_coordinates(
        cls, coordinates: Sequence[Sequence[float]], feature_id: Optional[str] = None
    ) -> "CoastlineFeature":
        """Build a feature from raw GeoJSON positions, tolerating ragged input.

        Positions may carry an altitude (``[lon, lat, alt]``); only the
        horizontal pair is kept.
        """

        try:
            vertices = np.array(coordinates, dtype=float)
        except (TypeError, ValueError):
            vertices = np.empty((0, 2), dtype=float)
        if vertices.ndim == 2 and vertices.shape[1] > 2:
            vertices = vertices[:, :2]
        return cls(vertices=vertices, feature_id=feature_id)

    @property
    def is_valid(self) -> bool:
        return (
            self.vertices.ndim == 2
            and self.vertices.shape[1:] == (2,)
            and self.vertices.shape[0] >= 2
            and not math.isnan(self.bounds[0])
        )

    def __len__(self) -> int:
        return int(self.vertices.shape[0]) if self.vertices.ndim else 0

    def __repr__(self) -> str:
        return (
            f"CoastlineFeature(id={self.feature_id!r}, vertices={len(self)}, "
            f"bounds={self.bounds!r})"
        )


@dataclass(frozen=True)
class SearchResult:
    """Terminal state of one search: the location plus how it was reached."""

    status: SearchStatus
    location: Location
    attempts: int
    intersections: int = 0

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"


__all__ = [
    "LonLat",
    "Extent",
    "EdgeSegment",
    "SearchStatus",
    "CoastfinderError",
    "DatasetLoadError",
    "GeometryError",
    "InvalidSeedError",
    "Location",
    "Candidate",
    "CoastlineFeature",
    "SearchResult",
]
