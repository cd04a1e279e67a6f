"""World grid square codes.

This package converts WGS84 positions to and from the hierarchical world
grid square code (compatible with JIS X0410), from 80 km squares down
to 125 m squares and the extended 100 m squares.  It also measures
geodesic distances with Vincenty's formulae and the representative
lengths and trapezoid area of a square.
"""

from .exceptions import ConvergenceError, InvalidDigit, InvalidMeshCode, WorldMeshError
from .models import LEVELS, BoundingBox, CellMetrics, GeoPoint, MeshLevel, Quadrant
from .quadrant import resolve_quadrant
from .formatting import truncate_coordinate
from .encoder import (
    cal_meshcode,
    cal_meshcode1,
    cal_meshcode2,
    cal_meshcode3,
    cal_meshcode4,
    cal_meshcode5,
    cal_meshcode6,
    cal_meshcode_ex100,
    encode,
    encode_extended_100m,
    encode_points,
)
from .decoder import (
    decode,
    is_valid_meshcode,
    mesh_level,
    meshcode_to_latlong,
    meshcode_to_latlong_grid,
    meshcode_to_latlong_ne,
    meshcode_to_latlong_nw,
    meshcode_to_latlong_se,
    meshcode_to_latlong_sw,
)
from .geodesic import geodesic_distance, vincenty
from .area import cal_area_from_latlong, cal_area_from_meshcode, cell_metrics
from .neighbors import neighbor, neighbors
from .tiling import generate_mesh_codes

__all__ = [
    "WorldMeshError",
    "InvalidMeshCode",
    "InvalidDigit",
    "ConvergenceError",
    "LEVELS",
    "BoundingBox",
    "CellMetrics",
    "GeoPoint",
    "MeshLevel",
    "Quadrant",
    "resolve_quadrant",
    "truncate_coordinate",
    "cal_meshcode",
    "cal_meshcode1",
    "cal_meshcode2",
    "cal_meshcode3",
    "cal_meshcode4",
    "cal_meshcode5",
    "cal_meshcode6",
    "cal_meshcode_ex100",
    "encode",
    "encode_extended_100m",
    "encode_points",
    "decode",
    "is_valid_meshcode",
    "mesh_level",
    "meshcode_to_latlong",
    "meshcode_to_latlong_grid",
    "meshcode_to_latlong_nw",
    "meshcode_to_latlong_sw",
    "meshcode_to_latlong_ne",
    "meshcode_to_latlong_se",
    "geodesic_distance",
    "vincenty",
    "cal_area_from_latlong",
    "cal_area_from_meshcode",
    "cell_metrics",
    "neighbor",
    "neighbors",
    "generate_mesh_codes",
]
