"""Location service: ``find_location(seed)`` over a lazily loaded coastline dataset."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, cast

from .config import SearchConfig, get_search_config
from .dataset import CoastlineDataset, DatasetCache, PathLike, get_dataset_cache
from .logging_utils import debug_log_call
from .rng import SeededSequence
from .search import run_search
from .types import Location, SearchResult

logger = logging.getLogger(__name__)


class LocationService:
    """Deterministic coastal viewport lookup.

    The service either wraps an in-memory ``dataset`` or a ``data_path`` that
    is loaded through the process-wide :class:`DatasetCache` on first use.
    Each call builds its own :class:`SeededSequence`; nothing shared is
    written during a search, so one instance may serve concurrent callers.

    Raises:
        DatasetLoadError: from :meth:`ensure_loaded` (and therefore from the
            first search) when the coastline file cannot be read or parsed.
    """

    def __init__(
        self,
        data_path: Optional[PathLike] = None,
        *,
        dataset: Optional[CoastlineDataset] = None,
        config: Optional[SearchConfig] = None,
        cache: Optional[DatasetCache] = None,
    ) -> None:
        if (data_path is None) == (dataset is None):
            raise ValueError("exactly one of data_path or dataset is required")
        self._data_path = Path(data_path) if data_path is not None else None
        self._dataset = dataset
        self._cache = cache
        self.config = config or get_search_config()
        errors = self.config.validate()
        if errors:
            raise ValueError("; ".join(errors))

    def __repr__(self) -> str:
        source = self._data_path if self._data_path is not None else self._dataset
        return f"LocationService(source={source!r})"

    @property
    def loaded(self) -> bool:
        if self._dataset is not None:
            return True
        return self._data_path in (self._cache or get_dataset_cache())

    def ensure_loaded(self) -> CoastlineDataset:
        """Return the dataset, loading it once if needed."""

        if self._dataset is not None:
            return self._dataset
        cache = self._cache or get_dataset_cache()
        return cache.get(cast(Path, self._data_path))

    @debug_log_call(logger, name="LocationService.search")
    def search(self, seed: int) -> SearchResult:
        """Run the search for ``seed`` and report how it terminated."""

        dataset = self.ensure_loaded()
        return run_search(SeededSequence(seed), dataset, seed, self.config)

    def find_location(self, seed: int) -> Location:
        return self.search(seed).location


__all__ = ["LocationService"]
