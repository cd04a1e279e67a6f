"""Representative lengths and area of grid squares.

A grid square is treated as a trapezoid on the ellipsoid: the northern
and southern edges (W1, W2) follow parallels and the height (H) follows
the western meridian.  The area is approximated as ``(W1 + W2) / 2 * H``
rather than integrated over the ellipsoidal patch.
"""

from typing import Union

from .decoder import MeshCode, meshcode_to_latlong_grid
from .geodesic import CONVERGENCE_TOLERANCE, MAX_ITERATIONS, vincenty
from .models import BoundingBox, CellMetrics


def cal_area_from_latlong(
    box: BoundingBox,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> CellMetrics:
    """Measure the trapezoid spanned by a bounding box.

    Parameters
    ----------
    box : BoundingBox
        North-west ``(lat0, long0)`` and south-east ``(lat1, long1)``
        corners.
    max_iterations, tolerance : optional
        Passed to :func:`~src.worldmesh.geodesic.vincenty`.

    Returns
    -------
    CellMetrics
        W1, W2 and H in metres and the area in square metres.
    """
    w1 = vincenty(box.lat0, box.long0, box.lat0, box.long1, max_iterations, tolerance)
    w2 = vincenty(box.lat1, box.long0, box.lat1, box.long1, max_iterations, tolerance)
    h = vincenty(box.lat0, box.long0, box.lat1, box.long0, max_iterations, tolerance)
    return CellMetrics(box=box, w1=w1, w2=w2, h=h, area=(w1 + w2) * h * 0.5)


def cal_area_from_meshcode(
    meshcode: MeshCode,
    extension: bool = False,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> CellMetrics:
    """Decode a grid square code and measure the square."""
    box = meshcode_to_latlong_grid(meshcode, extension)
    return cal_area_from_latlong(box, max_iterations, tolerance)


def cell_metrics(
    cell: Union[BoundingBox, MeshCode],
    extension: bool = False,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> CellMetrics:
    """Measure a grid square given either its code or its bounding box."""
    if isinstance(cell, BoundingBox):
        return cal_area_from_latlong(cell, max_iterations, tolerance)
    return cal_area_from_meshcode(cell, extension, max_iterations, tolerance)
