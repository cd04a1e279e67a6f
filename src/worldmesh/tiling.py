"""Enumerate grid squares over a latitude/longitude rectangle.

The squares holding the south-west and north-east corners of the
rectangle are decoded first.  Every square between them is then encoded
at its centre, so no sample point sits on a grid line where the encoder's
floor could move it into the adjacent square.
"""

from typing import Callable, List

from .decoder import meshcode_to_latlong_grid
from .encoder import cal_meshcode_ex100, encode
from .models import LEVELS


def _encoder(level: int, extension: bool) -> Callable[[float, float], int]:
    if extension:
        return cal_meshcode_ex100
    return lambda latitude, longitude: encode(latitude, longitude, level)


def generate_mesh_codes(
    lat_min: float,
    lon_min: float,
    lat_max: float,
    lon_max: float,
    level: int = 3,
    extension: bool = False,
) -> List[int]:
    """List the grid squares covering a rectangle.

    Parameters
    ----------
    lat_min, lon_min : float
        South-west corner of the region.
    lat_max, lon_max : float
        North-east corner of the region.
    level : int, optional
        Standard level 1..6, ignored when `extension` is set.
    extension : bool, optional
        Enumerate extended 100 m squares instead.

    Returns
    -------
    list of int
        Distinct codes, row by row from south to north and west to east
        within a row.
    """
    if lat_max < lat_min or lon_max < lon_min:
        raise ValueError("the north-east corner must not lie south or west of the south-west corner")
    key = "6-ext" if extension else str(level)
    if key not in LEVELS:
        raise ValueError(f"level must be between 1 and 6, got {level!r}")
    size = LEVELS[key]
    to_code = _encoder(level, extension)

    sw = meshcode_to_latlong_grid(to_code(lat_min, lon_min), extension)
    ne = meshcode_to_latlong_grid(to_code(lat_max, lon_max), extension)
    # Decoded corners are truncated, so count whole cells by rounding.
    n_rows = int(round((ne.lat1 - sw.lat1) / size.dlat)) + 1
    n_cols = int(round((ne.long0 - sw.long0) / size.dlong)) + 1

    codes = {}
    for i in range(n_rows):
        lat = sw.lat1 + (i + 0.5) * size.dlat
        for j in range(n_cols):
            lon = sw.long0 + (j + 0.5) * size.dlong
            codes.setdefault(to_code(lat, lon), None)
    return list(codes)
