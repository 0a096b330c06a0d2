"""Configuration for the search pipeline and its HTTP adapter."""

from __future__ import annotations

import copy
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .types import Location, LonLat

MAX_SEED_VALUE = 1_000_000
DEGREES_PER_256_PIXELS = 360.0 / 256.0

# File names follow the Natural Earth scale they were cut from (1:110m, 1:50m, 1:10m).
RESOLUTION_TIERS: Dict[str, str] = {
    "low": "coast110.geojson",
    "mid": "coast50.geojson",
    "high": "coast10.geojson",
}
SERVER_RESOLUTION = "mid"
CLIENT_RESOLUTION = "low"

DEFAULT_DATA_DIR = Path("public")


@dataclass(frozen=True)
class FallbackLocation:
    """Viewport used when no candidate is accepted (New York Harbor)."""

    center: LonLat = (-73.9857, 40.7484)
    zoom: float = 8.0
    rotation: float = 0.0

    def for_seed(self, seed: int) -> Location:
        return Location(center=self.center, zoom=self.zoom, rotation=self.rotation, seed=seed)


@dataclass
class SearchConfig:
    """Tunable constants of the viewport search.

    Attributes:
        min_zoom: Lowest zoom a candidate may be drawn at
        max_zoom: Highest zoom a candidate may be drawn at
        canvas_width: Fixed viewport width in pixels used to size the extent
        canvas_height: Fixed viewport height in pixels used to size the extent
        inset_ratio: Fraction the half-extent shrinks by before edges are tested
        min_intersections: Distinct edges that must be crossed to accept
        max_attempts: Candidates tried before returning the fallback
        fallback: Location returned when every attempt is rejected
    """

    min_zoom: float = 3.0
    max_zoom: float = 10.0
    canvas_width: int = 600
    canvas_height: int = 520
    inset_ratio: float = 0.05
    min_intersections: int = 2
    max_attempts: int = 100
    fallback: FallbackLocation = field(default_factory=FallbackLocation)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not (math.isfinite(self.min_zoom) and math.isfinite(self.max_zoom)):
            errors.append("min_zoom and max_zoom must be finite")
        elif self.min_zoom > self.max_zoom:
            errors.append("min_zoom must not exceed max_zoom")

        if self.canvas_width <= 0 or self.canvas_height <= 0:
            errors.append("canvas dimensions must be positive")

        if not (0.0 <= self.inset_ratio < 1.0):
            errors.append("inset_ratio must be in [0, 1)")

        if not (0 <= self.min_intersections <= 4):
            errors.append("min_intersections must be 0-4")

        if self.max_attempts < 1:
            errors.append("max_attempts must be at least 1")

        return errors


_SEARCH_CONFIG = SearchConfig()


def get_search_config() -> SearchConfig:
    return copy.deepcopy(_SEARCH_CONFIG)


def set_search_config(config: SearchConfig) -> None:
    errors = config.validate()
    if errors:
        raise ValueError("; ".join(errors))
    global _SEARCH_CONFIG
    _SEARCH_CONFIG = copy.deepcopy(config)


def tier_path(resolution: str, data_dir: Optional[Path] = None) -> Path:
    """Return the coastline file for a resolution tier."""

    try:
        name = RESOLUTION_TIERS[resolution]
    except KeyError:
        raise ValueError(
            f"unknown resolution {resolution!r}; expected one of {sorted(RESOLUTION_TIERS)}"
        ) from None
    return (data_dir or DEFAULT_DATA_DIR) / name


@dataclass
class ServerSettings:
    """Settings for the HTTP adapter."""

    host: str = "0.0.0.0"
    port: int = 3000
    data_path: Path = field(default_factory=lambda: tier_path(SERVER_RESOLUTION))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("PORT"):
            try:
                settings.port = int(env["PORT"])
            except ValueError:
                raise ValueError(f"PORT must be an integer, got {env['PORT']!r}") from None
        if env.get("COASTFINDER_HOST"):
            settings.host = env["COASTFINDER_HOST"]
        if env.get("COASTFINDER_DATA"):
            settings.data_path = Path(env["COASTFINDER_DATA"])
        return settings


__all__ = [
    "MAX_SEED_VALUE",
    "DEGREES_PER_256_PIXELS",
    "RESOLUTION_TIERS",
    "SERVER_RESOLUTION",
    "CLIENT_RESOLUTION",
    "FallbackLocation",
    "SearchConfig",
    "ServerSettings",
    "get_search_config",
    "set_search_config",
    "tier_path",
]
