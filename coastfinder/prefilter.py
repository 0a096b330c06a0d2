"""Coarse bounding-box reduction of a dataset to the features near an extent."""

from __future__ import annotations

from typing import List

import numpy as np

from .dataset import CoastlineDataset
from .types import CoastlineFeature, Extent


def overlap_mask(bounds: np.ndarray, extent: Extent) -> np.ndarray:
    """Return a boolean mask of the ``(N, 4)`` boxes that overlap ``extent``.

    NaN boxes compare false everywhere and are therefore kept.
    """

    min_x, min_y, max_x, max_y = extent
    disjoint = (
        (bounds[:, 2] < min_x)
        | (bounds[:, 0] > max_x)
        | (bounds[:, 3] < min_y)
        | (bounds[:, 1] > max_y)
    )
    return ~disjoint


def filter_features(dataset: CoastlineDataset, extent: Extent) -> List[CoastlineFeature]:
    """Return the features whose bounding boxes overlap ``extent``, in dataset order."""

    if not len(dataset):
        return []
    features = dataset.features
    return [features[idx] for idx in np.flatnonzero(overlap_mask(dataset.bounds, extent))]


__all__ = ["overlap_mask", "filter_features"]
