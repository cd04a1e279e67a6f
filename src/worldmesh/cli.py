"""Command-line interface for world grid square codes.

Usage:
    python -m src.worldmesh.cli encode --lat 35.590676 --lon 139.671488 --level 3
    python -m src.worldmesh.cli decode 2053393503
    python -m src.worldmesh.cli area 2053393503
    python -m src.worldmesh.cli neighbors 2053393503
    python -m src.worldmesh.cli tiles --bbox 35.5 139.5 35.7 139.8 --level 2
    python -m src.worldmesh.cli batch --input points.csv --output out/ --format parquet
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from .area import cal_area_from_meshcode
from .decoder import mesh_level, meshcode_to_latlong_grid
from .encoder import cal_meshcode_ex100, encode
from .exceptions import WorldMeshError
from .export import cells_to_dataframe, export_cells_to_csv, export_cells_to_parquet
from .neighbors import neighbors
from .settings import LOG_LEVELS, OUTPUT_FORMATS, MeshSettings, load_settings
from .tiling import generate_mesh_codes
from ..utils.logging import get_logger, set_package_level

logger = get_logger(__name__)


def _extension(args: argparse.Namespace, settings: MeshSettings) -> bool:
    return bool(args.extension) or settings.extension


def cmd_encode(args: argparse.Namespace, settings: MeshSettings) -> int:
    if args.extended:
        code = cal_meshcode_ex100(args.lat, args.lon)
    else:
        code = encode(args.lat, args.lon, args.level or settings.level)
    print(f"Lat={args.lat:f}, Lng={args.lon:f}")
    print(code)
    return 0


def cmd_decode(args: argparse.Namespace, settings: MeshSettings) -> int:
    extension = _extension(args, settings)
    box = meshcode_to_latlong_grid(args.code, extension)
    level = mesh_level(args.code, extension)
    print(f"level: {level.name} ({level.description})")
    print(f"NW({box.nw.longitude}, {box.nw.latitude}), SW({box.sw.longitude}, {box.sw.latitude}), "
          f"NE({box.ne.longitude}, {box.ne.latitude}), SE({box.se.longitude}, {box.se.latitude})")
    return 0


def cmd_area(args: argparse.Namespace, settings: MeshSettings) -> int:
    metrics = cal_area_from_meshcode(args.code, _extension(args, settings),
                                     settings.max_iterations, settings.tolerance)
    print(f"W1 = {metrics.w1:.3f} m")
    print(f"W2 = {metrics.w2:.3f} m")
    print(f"H  = {metrics.h:.3f} m")
    print(f"A  = {metrics.area:.3f} m2")
    return 0


def cmd_neighbors(args: argparse.Namespace, settings: MeshSettings) -> int:
    for direction, code in neighbors(args.code, _extension(args, settings)).items():
        print(f"{direction.capitalize()}: {code}")
    return 0


def cmd_tiles(args: argparse.Namespace, settings: MeshSettings) -> int:
    lat_min, lon_min, lat_max, lon_max = args.bbox
    codes = generate_mesh_codes(lat_min, lon_min, lat_max, lon_max,
                                level=args.level or settings.level,
                                extension=_extension(args, settings))
    for code in codes:
        print(code)
    logger.info("%d grid squares", len(codes))
    return 0


def cmd_batch(args: argparse.Namespace, settings: MeshSettings) -> int:
    points = pd.read_csv(args.input)
    missing = {"latitude", "longitude"} - set(points.columns)
    if missing:
        logger.error("Input %s lacks column(s): %s", args.input, ", ".join(sorted(missing)))
        return 1

    extension = _extension(args, settings)
    level = args.level or settings.level
    codes = []
    for lat, lon in tqdm(zip(points["latitude"], points["longitude"]),
                         total=len(points), desc="Encoding points"):
        codes.append(cal_meshcode_ex100(lat, lon) if extension else encode(lat, lon, level))

    unique_codes = list(dict.fromkeys(codes))
    cells = cells_to_dataframe(unique_codes, extension=extension, with_metrics=not args.no_metrics,
                               max_iterations=settings.max_iterations, tolerance=settings.tolerance)
    counts = pd.Series(codes).value_counts()
    cells["point_count"] = cells["meshcode"].map(counts).astype("int64")

    fmt = args.format or settings.output_format
    if fmt == "parquet":
        path = export_cells_to_parquet(cells, Path(args.output))
    else:
        path = export_cells_to_csv(cells, Path(args.output))
    print(f"{len(points):,} points in {len(cells):,} grid squares -> {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="World grid square (mesh code) encoder, decoder and area calculator"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a YAML settings file (default: configs/worldmesh.yaml)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="Logging level (overrides the settings file)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="Encode a position")
    p.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    p.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    p.add_argument("--level", type=int, choices=range(1, 7), default=None,
                   help="Standard level 1 (80km) to 6 (125m)")
    p.add_argument("--extended", action="store_true", help="Produce an extended 100m code")
    p.set_defaults(func=cmd_encode)

    for name, func, text in (
        ("decode", cmd_decode, "Print the corners of a grid square"),
        ("area", cmd_area, "Print the edge lengths and area of a grid square"),
        ("neighbors", cmd_neighbors, "Print the four adjacent grid squares"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("code", type=str, help="Grid square code")
        p.add_argument("--extension", action="store_true",
                       help="Read a 13-digit code as an extended 100m code")
        p.set_defaults(func=func)

    p = sub.add_parser("tiles", help="List the grid squares covering a rectangle")
    p.add_argument("--bbox", type=float, nargs=4, required=True,
                   metavar=("LAT_MIN", "LON_MIN", "LAT_MAX", "LON_MAX"))
    p.add_argument("--level", type=int, choices=range(1, 7), default=None)
    p.add_argument("--extension", action="store_true", help="Enumerate extended 100m squares")
    p.set_defaults(func=cmd_tiles)

    p = sub.add_parser("batch", help="Encode a CSV of positions and export the grid squares")
    p.add_argument("--input", type=str, required=True,
                   help="CSV file with latitude and longitude columns")
    p.add_argument("--output", type=str, required=True, help="Output directory")
    p.add_argument("--format", type=str, choices=OUTPUT_FORMATS, default=None)
    p.add_argument("--level", type=int, choices=range(1, 7), default=None)
    p.add_argument("--extension", action="store_true", help="Produce extended 100m codes")
    p.add_argument("--no-metrics", action="store_true", help="Skip the W1/W2/H/A columns")
    p.set_defaults(func=cmd_batch)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        return 1
    try:
        set_package_level(args.log_level or settings.log_level)
        return args.func(args, settings)
    except (WorldMeshError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
