"""Demo script for the world grid square routines.

Encodes a position in Tokyo, prints the corners of its 1 km square and
the codes of the four adjacent squares, then measures the square and
exports a small table of synthetic positions.

Usage:
    python examples/demo_worldmesh.py
"""

import sys
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.worldmesh import (
    cal_area_from_meshcode,
    cal_meshcode3,
    cal_meshcode6,
    cal_meshcode_ex100,
    encode_points,
    meshcode_to_latlong_grid,
    neighbors,
)
from src.worldmesh.export import cells_to_dataframe, export_cells_to_csv


def create_synthetic_positions(
    n_points: int = 1000,
    origin: tuple = (35.590676, 139.671488),
    spread: float = 0.05,
) -> np.ndarray:
    """Scatter positions around an origin.

    Parameters
    ----------
    n_points : int
        Number of positions.
    origin : tuple
        (latitude, longitude) of the centre in degrees.
    spread : float
        Half-width of the scatter in degrees.

    Returns
    -------
    np.ndarray
        Array of shape (n_points, 2) with latitude and longitude.
    """
    rng = np.random.default_rng(0)
    lat = rng.uniform(origin[0] - spread, origin[0] + spread, n_points)
    lon = rng.uniform(origin[1] - spread, origin[1] + spread, n_points)
    return np.column_stack([lat, lon])


def main():
    """Run demo."""
    print("=" * 70)
    print("World grid square - Demo")
    print("=" * 70)

    latitude = 35.590676
    longitude = 139.671488
    code = cal_meshcode3(latitude, longitude)
    print(f"Lat={latitude:f}, Lng={longitude:f}")
    print(code)

    box = meshcode_to_latlong_grid(code)
    print(f"NW({box.nw.longitude:f}, {box.nw.latitude:f}), SW({box.sw.longitude:f}, {box.sw.latitude:f}), "
          f"NE({box.ne.longitude:f}, {box.ne.latitude:f}), SE({box.se.longitude:f}, {box.se.latitude:f})")
    for direction, adjacent in neighbors(code).items():
        print(f"{direction.capitalize()}: {adjacent}")

    print()
    print(f"125m code:          {cal_meshcode6(latitude, longitude)}")
    print(f"Extended 100m code: {cal_meshcode_ex100(latitude, longitude)}")

    metrics = cal_area_from_meshcode(code)
    print(f"W1 = {metrics.w1:.3f} m, W2 = {metrics.w2:.3f} m, H = {metrics.h:.3f} m, A = {metrics.area:.1f} m2")

    print()
    positions = create_synthetic_positions()
    codes = encode_points(positions[:, 0], positions[:, 1], level=3)
    unique_codes = np.unique(codes)
    print(f"✓ {len(positions):,} positions fall in {len(unique_codes)} 1 km squares")

    output_dir = Path("output/demo_worldmesh")
    table = cells_to_dataframe(unique_codes.tolist())
    path = export_cells_to_csv(table, output_dir)
    print(f"  • Cell table: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
