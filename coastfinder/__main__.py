import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from coastfinder import (
    DatasetLoadError,
    InvalidSeedError,
    LocationService,
    SearchConfig,
    ServerSettings,
    generate_random_seed,
    get_search_config,
    parse_seed,
    tier_path,
)
from coastfinder.config import RESOLUTION_TIERS
from coastfinder.logging_utils import configure_logging
from coastfinder.server import run_server

logger = logging.getLogger(__name__)


def _seed_arg(value: str) -> int:
    try:
        return parse_seed(value)
    except InvalidSeedError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _search_config(args: argparse.Namespace) -> SearchConfig:
    config = get_search_config()
    if args.min_zoom is not None:
        config.min_zoom = args.min_zoom
    if args.max_zoom is not None:
        config.max_zoom = args.max_zoom
    if args.max_attempts is not None:
        config.max_attempts = args.max_attempts
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error("Invalid search configuration: %s", error)
        raise SystemExit(2)
    return config


def _data_path(args: argparse.Namespace) -> Path:
    if args.data:
        return Path(args.data)
    return tier_path(args.resolution, Path(args.data_dir) if args.data_dir else None)


def _cmd_find(args: argparse.Namespace) -> int:
    seed = args.seed if args.seed is not None else generate_random_seed()
    service = LocationService(_data_path(args), config=_search_config(args))
    try:
        result = service.search(seed)
    except DatasetLoadError as exc:
        logger.error("%s", exc)
        return 1

    location = result.location
    if args.json:
        print(json.dumps(location.to_dict()))
        return 0

    print(f"Seed: {location.seed}")
    print(f"Status: {result.status} after {result.attempts} attempt(s)")
    print(f"Center: ({location.center[0]:.6f}, {location.center[1]:.6f})")
    print(f"Zoom: {location.zoom:.4f}")
    print(f"Rotation: {location.rotation:.4f}")
    if result.accepted:
        print(f"Edges crossed: {result.intersections}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    settings = ServerSettings.from_env()
    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.data:
        settings.data_path = Path(args.data)
    try:
        run_server(settings)
    except DatasetLoadError as exc:
        logger.error("Cannot start server: %s", exc)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coastfinder", description="Find seed-determined map viewports that frame a coastline"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    find = commands.add_parser("find", help="Search a location for a seed")
    find.add_argument(
        "seed",
        nargs="?",
        type=_seed_arg,
        help="Integer seed (random when omitted)",
    )
    find.add_argument("--data", help="Path to a GeoJSON coastline file")
    find.add_argument(
        "--resolution",
        choices=sorted(RESOLUTION_TIERS),
        default="mid",
        help="Coastline tier used when --data is not given (default: mid)",
    )
    find.add_argument("--data-dir", help="Directory holding the coastline tiers (default: public)")
    find.add_argument("--min-zoom", type=float, help="Lowest candidate zoom")
    find.add_argument("--max-zoom", type=float, help="Highest candidate zoom")
    find.add_argument("--max-attempts", type=int, help="Attempts before the fallback location")
    find.add_argument("--json", action="store_true", help="Print the location as JSON")
    find.set_defaults(handler=_cmd_find)

    serve = commands.add_parser("serve", help="Run the HTTP location service")
    serve.add_argument("--data", help="Path to a GeoJSON coastline file (env: COASTFINDER_DATA)")
    serve.add_argument("--host", help="Bind address (env: COASTFINDER_HOST, default: 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port (env: PORT, default: 3000)")
    serve.set_defaults(handler=_cmd_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
