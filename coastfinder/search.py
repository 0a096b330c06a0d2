"""Bounded search loop: candidate, prefilter, edge test, accept or retry."""

from __future__ import annotations

import logging
from typing import Optional

from .candidates import generate_candidate
from .config import SearchConfig, get_search_config
from .dataset import CoastlineDataset
from .edges import count_intersections
from .prefilter import filter_features
from .rng import SeededSequence
from .types import SearchResult

logger = logging.getLogger(__name__)


def run_search(
    seq: SeededSequence,
    dataset: CoastlineDataset,
    seed: int,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """Run attempts until a candidate is accepted or ``max_attempts`` is spent.

    ``seq`` is consumed across attempts and never reset, so every retry is
    itself determined by the seed. The returned location always carries
    ``seed``, including the fallback.
    """

    config = config or get_search_config()

    attempt = 0
    while attempt < config.max_attempts:
        attempt += 1
        candidate = generate_candidate(seq, config)
        relevant = filter_features(dataset, candidate.view_extent)
        intersections = count_intersections(candidate, relevant, config)
        logger.debug(
            "Attempt %d/%d: center=(%.5f, %.5f) zoom=%.3f candidates=%d edges=%d",
            attempt,
            config.max_attempts,
            candidate.center[0],
            candidate.center[1],
            candidate.zoom,
            len(relevant),
            intersections,
        )
        if intersections >= config.min_intersections:
            location = candidate.to_location(seed)
            logger.info(
                "Coastal location found for seed %d after %d attempt(s): center=(%.5f, %.5f) "
                "zoom=%.3f rotation=%.3f edges=%d",
                seed,
                attempt,
                location.center[0],
                location.center[1],
                location.zoom,
                location.rotation,
                intersections,
            )
            return SearchResult(
                status="accepted", location=location, attempts=attempt, intersections=intersections
            )

    logger.warning(
        "No coastal location for seed %d within %d attempts; using fallback", seed, attempt
    )
    return SearchResult(status="fallback", location=config.fallback.for_seed(seed), attempts=attempt)


__all__ = ["run_search"]
