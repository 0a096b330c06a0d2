"""Example pipeline: search seeded viewports over a hand-drawn coastline."""

from coastfinder import CoastlineDataset, LocationService

# A crude Atlantic seaboard from Florida to Maine, plus a Gulf of Mexico arc.
SEABOARD = [
    (-80.1, 25.8),
    (-80.6, 28.4),
    (-81.4, 30.7),
    (-79.0, 33.7),
    (-75.5, 35.2),
    (-76.0, 37.0),
    (-74.0, 40.5),
    (-71.0, 41.5),
    (-70.0, 43.7),
    (-67.0, 44.8),
]
GULF = [
    (-80.1, 25.8),
    (-82.5, 27.9),
    (-84.3, 30.0),
    (-88.0, 30.4),
    (-90.0, 29.2),
    (-94.0, 29.6),
    (-97.3, 27.8),
]


def main() -> None:
    dataset = CoastlineDataset.from_polylines([SEABOARD, GULF], name="example")
    service = LocationService(dataset=dataset)

    for seed in (1, 42, 2024, 31337):
        result = service.search(seed)
        lon, lat = result.location.center
        print(
            f"seed={seed:>6} status={result.status:<8} attempts={result.attempts:>3} "
            f"center=({lon:.4f}, {lat:.4f}) zoom={result.location.zoom:.2f}"
        )


if __name__ == "__main__":
    main()
