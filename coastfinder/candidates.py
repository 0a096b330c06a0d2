"""Turn draws from a :class:`SeededSequence` into viewport candidates."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import DEGREES_PER_256_PIXELS, SearchConfig, get_search_config
from .rng import SeededSequence
from .types import Candidate, Extent, LonLat


def view_size(zoom: float, config: SearchConfig) -> Tuple[float, float]:
    """Approximate ``(width, height)`` in degrees of the canvas at ``zoom``."""

    degrees_per_pixel = DEGREES_PER_256_PIXELS / math.pow(2.0, zoom)
    return config.canvas_width * degrees_per_pixel, config.canvas_height * degrees_per_pixel


def view_extent(center: LonLat, zoom: float, config: Optional[SearchConfig] = None) -> Extent:
    """Return ``(min_lon, min_lat, max_lon, max_lat)`` of the view around ``center``."""

    config = config or get_search_config()
    lon, lat = center
    width, height = view_size(zoom, config)
    return (
        lon - width / 2,
        lat - height / 2,
        lon + width / 2,
        lat + height / 2,
    )


def generate_candidate(seq: SeededSequence, config: Optional[SearchConfig] = None) -> Candidate:
    """Draw exactly four values (lon, lat, zoom, rotation) and build a candidate.

    The draw order is part of the seed contract. Latitude is uniform in
    degrees, not in area.
    """

    config = config or get_search_config()
    lon = seq.next() * 360 - 180
    lat = seq.next() * 180 - 90
    zoom = seq.next() * (config.max_zoom - config.min_zoom) + config.min_zoom
    rotation = seq.next() * 2 * math.pi

    center = (lon, lat)
    return Candidate(
        center=center,
        zoom=zoom,
        rotation=rotation,
        view_extent=view_extent(center, zoom, config),
    )


__all__ = ["view_size", "view_extent", "generate_candidate"]
