"""HTTP adapter exposing :class:`LocationService` over aiohttp."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from aiohttp import web

from .config import ServerSettings
from .rng import parse_seed
from .service import LocationService
from .types import InvalidSeedError

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("location_service", LocationService)

LOCATION_ROUTE = "/api/coastal-location"


def cors_response(data: Any, status: int = 200) -> web.Response:
    resp = web.json_response(data, status=status)
    resp.headers["Access-Control-Allow-Origin"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return resp


async def _respond_with_location(request: web.Request, raw_seed: Optional[str]) -> web.Response:
    try:
        seed = parse_seed(raw_seed)
    except InvalidSeedError:
        return cors_response({"error": "Invalid seed parameter"}, status=400)

    service = request.app[SERVICE_KEY]
    loop = asyncio.get_running_loop()
    try:
        location = await loop.run_in_executor(None, service.find_location, seed)
    except Exception:
        logger.exception("Error finding coastal location for seed %d", seed)
        return cors_response({"error": "Failed to find coastal location"}, status=500)
    return cors_response(location.to_dict())


async def get_location_by_path(request: web.Request) -> web.Response:
    return await _respond_with_location(request, request.match_info["seed"])


async def get_location_by_query(request: web.Request) -> web.Response:
    return await _respond_with_location(request, request.query.get("seed"))


async def handle_options(request: web.Request) -> web.Response:
    return cors_response({})


async def _load_dataset(app: web.Application) -> None:
    # A missing or corrupt coastline file must stop startup, not surface per request.
    service = app[SERVICE_KEY]
    loop = asyncio.get_running_loop()
    dataset = await loop.run_in_executor(None, service.ensure_loaded)
    logger.info("Serving coastal locations from %r", dataset)


def create_app(service: LocationService) -> web.Application:
    """Create the aiohttp application for ``service``."""

    app = web.Application()
    app[SERVICE_KEY] = service
    app.on_startup.append(_load_dataset)
    app.router.add_get(LOCATION_ROUTE, get_location_by_query)
    app.router.add_get(LOCATION_ROUTE + "/{seed}", get_location_by_path)
    app.router.add_options(LOCATION_ROUTE, handle_options)
    app.router.add_options(LOCATION_ROUTE + "/{seed}", handle_options)
    return app


def run_server(settings: Optional[ServerSettings] = None) -> None:
    settings = settings or ServerSettings.from_env()
    service = LocationService(settings.data_path)
    logger.info("Starting coastal location server on %s:%d", settings.host, settings.port)
    web.run_app(create_app(service), host=settings.host, port=settings.port, print=None)


__all__ = [
    "SERVICE_KEY",
    "LOCATION_ROUTE",
    "cors_response",
    "create_app",
    "run_server",
]
