"""Adjacent grid squares.

The neighbour of a square is found by moving its centre one cell
height (or width) in the requested direction and encoding the result
at the same level.  Moving from the centre keeps the sample point clear of the
truncated corner coordinates, so it never lands on an edge.
"""

from typing import Dict

from .decoder import MeshCode, mesh_level, meshcode_to_latlong_grid
from .encoder import cal_meshcode_ex100, encode

DIRECTIONS = ("north", "south", "east", "west")

_STEPS = {
    "north": (1, 0),
    "south": (-1, 0),
    "east": (0, 1),
    "west": (0, -1),
}


def neighbor(meshcode: MeshCode, direction: str, extension: bool = False) -> int:
    """Return the code of the square adjacent to `meshcode`.

    Parameters
    ----------
    meshcode : int or str
        Grid square code.
    direction : str
        One of ``"north"``, ``"south"``, ``"east"`` or ``"west"``.
    extension : bool, optional
        Treat a 13-digit code as an extended 100 m code.

    Returns
    -------
    int
        Code of the adjacent square at the same level.
    """
    if direction not in _STEPS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")
    level = mesh_level(meshcode, extension)
    box = meshcode_to_latlong_grid(meshcode, extension)
    dlat, dlong = _STEPS[direction]
    center = box.center
    latitude = center.latitude + dlat * level.dlat
    longitude = center.longitude + dlong * level.dlong
    if level.name == "6-ext":
        return cal_meshcode_ex100(latitude, longitude)
    return encode(latitude, longitude, int(level.name))


def neighbors(meshcode: MeshCode, extension: bool = False) -> Dict[str, int]:
    """Return the codes of the four edge-adjacent squares."""
    return {direction: neighbor(meshcode, direction, extension) for direction in DIRECTIONS}
