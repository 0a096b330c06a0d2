"""Client for the location endpoint with a local search as fallback.

The remote service searches authoritative mid-resolution coastline. When it
cannot be reached, the client runs the same search against whatever
coastline it already holds (normally the low-resolution tier). Both paths
share the generator and predicates, so only the data differs.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp

from .config import CLIENT_RESOLUTION, SearchConfig, tier_path
from .server import LOCATION_ROUTE
from .service import LocationService
from .types import Location

logger = logging.getLogger(__name__)


class LocationClient:
    """Fetch locations from a remote server, degrading to ``local`` on failure."""

    def __init__(
        self,
        base_url: str,
        local: LocationService,
        *,
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.local = local
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    @classmethod
    def with_local_tier(
        cls,
        base_url: str,
        data_dir: Optional[Path] = None,
        *,
        resolution: str = CLIENT_RESOLUTION,
        config: Optional[SearchConfig] = None,
        **kwargs,
    ) -> "LocationClient":
        local = LocationService(tier_path(resolution, data_dir), config=config)
        return cls(base_url, local, **kwargs)

    def location_url(self, seed: int) -> str:
        return f"{self.base_url}{LOCATION_ROUTE}/{seed}"

    async def _get(self, session: aiohttp.ClientSession, seed: int) -> Location:
        async with session.get(self.location_url(seed), timeout=self.timeout) as resp:
            resp.raise_for_status()
            payload = await resp.json()
        location = Location.from_dict(payload)
        if location.seed != seed:
            raise ValueError(f"server answered seed {location.seed} for request {seed}")
        return location

    async def fetch_remote(self, seed: int) -> Location:
        """Ask the remote service; errors propagate to the caller."""

        if self._session is not None:
            return await self._get(self._session, seed)
        async with aiohttp.ClientSession() as session:
            return await self._get(session, seed)

    async def find_location(self, seed: int) -> Location:
        try:
            return await self.fetch_remote(seed)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Location service unavailable (%s); searching locally for seed %d", exc, seed)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed location response (%s); searching locally for seed %d", exc, seed)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.local.find_location, seed)


__all__ = ["LocationClient"]
