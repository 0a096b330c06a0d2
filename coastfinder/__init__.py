"""coastfinder - seed-determined map viewports that frame a coastline.

A seed drives a fixed linear congruential stream; each attempt turns four
draws into a candidate viewport and accepts it when coastline crosses at
least two sides of its inset frame. The same code runs on the server over
authoritative data and on clients over lower-resolution data.
"""

from .candidates import generate_candidate, view_extent
from .config import (
    MAX_SEED_VALUE,
    FallbackLocation,
    SearchConfig,
    ServerSettings,
    get_search_config,
    set_search_config,
    tier_path,
)
from .dataset import CoastlineDataset, DatasetCache, get_dataset_cache, load_geojson, parse_geojson
from .edges import count_intersections, edge_segments
from .geometry import boxes_overlap, segment_intersects_polyline
from .prefilter import filter_features
from .rng import SeededSequence, generate_random_seed, parse_seed
from .search import run_search
from .service import LocationService
from .types import (
    Candidate,
    CoastfinderError,
    CoastlineFeature,
    DatasetLoadError,
    GeometryError,
    InvalidSeedError,
    Location,
    SearchResult,
)

__version__ = "0.1.0"
__all__ = [
    "generate_candidate",
    "view_extent",
    "MAX_SEED_VALUE",
    "FallbackLocation",
    "SearchConfig",
    "ServerSettings",
    "get_search_config",
    "set_search_config",
    "tier_path",
    "CoastlineDataset",
    "DatasetCache",
    "get_dataset_cache",
    "load_geojson",
    "parse_geojson",
    "count_intersections",
    "edge_segments",
    "boxes_overlap",
    "segment_intersects_polyline",
    "filter_features",
    "SeededSequence",
    "generate_random_seed",
    "parse_seed",
    "run_search",
    "LocationService",
    "Candidate",
    "CoastfinderError",
    "CoastlineFeature",
    "DatasetLoadError",
    "GeometryError",
    "InvalidSeedError",
    "Location",
    "SearchResult",
]
