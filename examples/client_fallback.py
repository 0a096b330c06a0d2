"""Example: a client whose server is down answers from its own coastline data."""

import asyncio
import logging

from coastfinder import CoastlineDataset, LocationService
from coastfinder.client import LocationClient

# Meridian lines every half degree stand in for a low-resolution coastline tier.
LOW_RES = CoastlineDataset.from_polylines(
    [[(lon / 2, -85.0), (lon / 2, 85.0)] for lon in range(-360, 361)], name="low"
)


async def main() -> None:
    local = LocationService(dataset=LOW_RES)
    client = LocationClient("http://127.0.0.1:9", local, timeout=1.0)
    location = await client.find_location(42)
    print(location.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    asyncio.run(main())
