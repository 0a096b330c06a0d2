"""Count how many sides of a candidate's inset frame are crossed by coastline."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .candidates import view_size
from .config import SearchConfig, get_search_config
from .geometry import segment_intersects_polyline
from .types import Candidate, CoastlineFeature, EdgeSegment, GeometryError, LonLat

logger = logging.getLogger(__name__)


def edge_segments(
    center: LonLat, zoom: float, config: Optional[SearchConfig] = None
) -> List[EdgeSegment]:
    """Return the inset frame around ``center`` as bottom, right, top, left segments.

    The half-width and half-height of the view are scaled by
    ``1 - inset_ratio`` so a crossing has to fall inside the visible frame.
    """

    config = config or get_search_config()
    width, height = view_size(zoom, config)
    half_width = (width / 2) * (1 - config.inset_ratio)
    half_height = (height / 2) * (1 - config.inset_ratio)

    lon, lat = center
    min_x = lon - half_width
    max_x = lon + half_width
    min_y = lat - half_height
    max_y = lat + half_height

    return [
        ((min_x, min_y), (max_x, min_y)),
        ((max_x, min_y), (max_x, max_y)),
        ((max_x, max_y), (min_x, max_y)),
        ((min_x, max_y), (min_x, min_y)),
    ]


def _edge_hits(edge: EdgeSegment, features: Sequence[CoastlineFeature]) -> bool:
    start, end = edge
    for feature in features:
        try:
            if segment_intersects_polyline(start, end, feature.vertices):
                return True
        except GeometryError as exc:
            logger.debug("Ignoring unusable geometry %r: %s", feature, exc)
    return False


def count_intersections(
    candidate: Candidate,
    features: Sequence[CoastlineFeature],
    config: Optional[SearchConfig] = None,
) -> int:
    """Return the number of distinct frame edges (0-4) crossed by any feature."""

    edges = edge_segments(candidate.center, candidate.zoom, config)
    return sum(1 for edge in edges if _edge_hits(edge, features))


__all__ = ["edge_segments", "count_intersections"]
