"""Planar predicates on lon/lat coordinates."""

from __future__ import annotations

import numpy as np

from .types import Extent, GeometryError, LonLat


def boxes_overlap(a: Extent, b: Extent) -> bool:
    """Return ``True`` unless the two ``(min_x, min_y, max_x, max_y)`` boxes are disjoint.

    Touching boxes overlap. Comparisons against NaN are false, so a box with
    undefined bounds is never reported as disjoint.
    """

    return not (a[2] < b[0] or a[0] > b[2] or a[3] < b[1] or a[1] > b[3])


def _cross2(u: np.ndarray, w: np.ndarray) -> np.ndarray:
    return u[..., 0] * w[..., 1] - u[..., 1] * w[..., 0]


def _within_box(lo_pt: np.ndarray, hi_pt: np.ndarray, pt: np.ndarray) -> np.ndarray:
    lo = np.minimum(lo_pt, hi_pt)
    hi = np.maximum(lo_pt, hi_pt)
    return np.all((pt >= lo) & (pt <= hi), axis=-1)


def as_polyline(vertices: np.ndarray) -> np.ndarray:
    """Return ``vertices`` as an ``(n, 2)`` float array or raise :class:`GeometryError`."""

    try:
        arr = np.asarray(vertices, dtype=float)
    except (TypeError, ValueError) as exc:
        raise GeometryError(f"polyline is not numeric: {exc}") from exc
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise GeometryError(f"polyline must have shape (n, 2), got {arr.shape}")
    if arr.shape[0] < 2:
        raise GeometryError("polyline needs at least two vertices")
    if not np.all(np.isfinite(arr)):
        raise GeometryError("polyline has non-finite coordinates")
    return arr


def segment_intersects_polyline(start: LonLat, end: LonLat, vertices: np.ndarray) -> bool:
    """Return ``True`` when segment ``start``-``end`` meets any segment of the polyline.

    Every consecutive vertex pair is tested at once with orientation signs.
    Touching endpoints and collinear overlap count as intersections.
    """

    poly = as_polyline(vertices)
    p = np.asarray(start, dtype=float)
    q = np.asarray(end, dtype=float)
    a = poly[:-1]
    b = poly[1:]

    seg = b - a
    edge = q - p
    d1 = _cross2(seg, p - a)
    d2 = _cross2(seg, q - a)
    d3 = _cross2(edge, a - p)
    d4 = _cross2(edge, b - p)

    straddle_edge = ((d1 > 0) & (d2 < 0)) | ((d1 < 0) & (d2 > 0))
    straddle_seg = ((d3 > 0) & (d4 < 0)) | ((d3 < 0) & (d4 > 0))
    if np.any(straddle_edge & straddle_seg):
        return True

    touching = (
        ((d1 == 0) & _within_box(a, b, p))
        | ((d2 == 0) & _within_box(a, b, q))
        | ((d3 == 0) & _within_box(p, q, a))
        | ((d4 == 0) & _within_box(p, q, b))
    )
    return bool(np.any(touching))


__all__ = ["boxes_overlap", "as_polyline", "segment_intersects_polyline"]
