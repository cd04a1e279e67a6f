"""Decode world grid square codes into bounding boxes.

Code layout (one letter per digit)::

    A BBB BB CC DD E F G     standard track, 6 to 13 digits
    A BBB BB CC DD E HH      extended 100 m track, 13 digits

``A`` is the area code, the two ``B`` fields are the 80 km latitude and
longitude indices, ``CC`` and ``DD`` the 10 km and 1 km row/column pairs,
``E``, ``F``, ``G`` the 500 m, 250 m and 125 m quadrant digits::

        N
      3 | 4
    W - + - E
      1 | 2
        S

and ``HH`` the extended row/column pair (0..4 each) inside the 500 m
cell.

The decoder rebuilds the north-west corner level by level.  The level
terms are chosen so that the accumulated magnitude is the edge that
becomes the north-west corner once the hemisphere signs are applied.
"""

from typing import List, Tuple, Union

from .exceptions import InvalidDigit, InvalidMeshCode
from .formatting import truncate_coordinate
from .models import BoundingBox, GeoPoint, MeshLevel, Quadrant, level_for_digits
from ..utils.logging import get_logger

logger = get_logger(__name__)

MeshCode = Union[int, str]

# Successive divisors from one level to the next.
_STANDARD_DIVISORS = (8.0, 10.0, 2.0, 2.0, 2.0)
_EXTENDED_DIVISORS = (8.0, 10.0, 2.0, 5.0)

_AREA = range(1, 9)
_OCTAL = range(0, 8)
_DECIMAL = range(0, 10)
_QUADRANT = range(1, 5)
_EXTENDED = range(0, 5)


def _as_text(meshcode: MeshCode) -> str:
    if isinstance(meshcode, bool):
        raise InvalidMeshCode(meshcode, "not a mesh code")
    if isinstance(meshcode, int):
        if meshcode < 0:
            raise InvalidMeshCode(meshcode, "negative value")
        text = str(meshcode)
    elif isinstance(meshcode, str):
        text = meshcode.strip()
    else:
        raise InvalidMeshCode(meshcode, f"unsupported type {type(meshcode).__name__}")
    if not text.isdigit() or not text.isascii():
        raise InvalidMeshCode(meshcode, "contains non-digit characters")
    if len(text) < 6:
        raise InvalidMeshCode(meshcode, f"{len(text)} digits, at least 6 required")
    return text


def _digit(meshcode: MeshCode, text: str, position: int, allowed: range) -> int:
    value = int(text[position])
    if value not in allowed:
        raise InvalidDigit(meshcode, position, value, allowed)
    return value


def _latitude_index(text: str) -> int:
    field = text[1:4]
    if field[:2] == "00":
        return int(field[2])
    if field[0] == "0":
        return int(field[1:])
    return int(field)


def _longitude_index(text: str) -> int:
    if text[4] == "0":
        return int(text[5])
    return int(text[4:6])


def mesh_level(meshcode: MeshCode, extension: bool = False) -> MeshLevel:
    """Return the resolution level of a code.

    Raises
    ------
    InvalidMeshCode
        If the code is too short or its digit count has no level.
    """
    text = _as_text(meshcode)
    try:
        return level_for_digits(len(text), extension)
    except KeyError:
        raise InvalidMeshCode(meshcode, f"no level has {len(text)} digits") from None


def _scale(value: float, divisors: Tuple[float, ...]) -> float:
    for divisor in divisors:
        value = value / divisor
    return value


def _lat_term(value: int, divisors: Tuple[float, ...]) -> float:
    return _scale(value * 2.0 / 3.0, divisors)


def _lon_term(value: int, divisors: Tuple[float, ...]) -> float:
    return _scale(float(value), divisors)


def _decode_terms(
    meshcode: MeshCode,
    text: str,
    quadrant: Quadrant,
    extension: bool,
) -> Tuple[List[float], List[float], Tuple[float, ...]]:
    """Collect the per-level latitude and longitude terms.

    Returns the two lists of terms (coarsest first) and the divisor chain
    of the finest level, which gives the cell size.
    """
    x, y, z = quadrant.x, quadrant.y, quadrant.z
    n = len(text)
    divisors = _EXTENDED_DIVISORS if (extension and n == 13) else _STANDARD_DIVISORS

    lat_index = _latitude_index(text)
    lon_index = _longitude_index(text)
    # Row/column pairs of the 80 km, 10 km and 1 km levels.
    rows = [lat_index]
    cols = [lon_index]
    if n >= 8:
        rows.append(_digit(meshcode, text, 6, _OCTAL))
        cols.append(_digit(meshcode, text, 7, _OCTAL))
    if n >= 10:
        rows.append(_digit(meshcode, text, 8, _DECIMAL))
        cols.append(_digit(meshcode, text, 9, _DECIMAL))

    lat_terms: List[float] = []
    lon_terms: List[float] = []
    finest = len(rows) - 1
    for k, (row, col) in enumerate(zip(rows, cols)):
        if k == finest:
            row, col = row - x + 1, col + y
        lat_terms.append(_lat_term(row, divisors[:k]))
        lon_terms.append(_lon_term(col + 100 * z if k == 0 else col, divisors[:k]))

    if extension and n == 13:
        half = _digit(meshcode, text, 10, _QUADRANT)
        et = _digit(meshcode, text, 11, _EXTENDED)
        jt = _digit(meshcode, text, 12, _EXTENDED)
        lat_terms.append(_lat_term((half - 1) // 2 + 2 * x - 2, divisors[:3]))
        lon_terms.append(_lon_term((half - 1) % 2 - 2 * y, divisors[:3]))
        lat_terms.append(_lat_term(et - x + 1, divisors[:4]))
        lon_terms.append(_lon_term(jt + y, divisors[:4]))
        return lat_terms, lon_terms, divisors

    for k, position in enumerate(range(10, n), start=3):
        quad = _digit(meshcode, text, position, _QUADRANT)
        lat_terms.append(_lat_term((quad - 1) // 2 + x - 1, divisors[:k]))
        lon_terms.append(_lon_term((quad - 1) % 2 - y, divisors[:k]))
    return lat_terms, lon_terms, divisors[:len(lat_terms) - 1]


def meshcode_to_latlong_grid(meshcode: MeshCode, extension: bool = False) -> BoundingBox:
    """Calculate the north-west and south-east corners of a grid square.

    Parameters
    ----------
    meshcode : int or str
        Grid square code with 6, 8, 10, 11, 12 or 13 digits.
    extension : bool, optional
        Read a 13-digit code as an extended 100 m code rather than a
        125 m code.  Ignored for shorter codes.

    Returns
    -------
    BoundingBox
        Corners truncated with :func:`truncate_coordinate`.

    Raises
    ------
    InvalidMeshCode
        If the code has fewer than 6 digits, a digit count with no level
        or non-digit characters.
    InvalidDigit
        If a digit lies outside the range allowed at its position.
    """
    level = mesh_level(meshcode, extension)
    text = _as_text(meshcode)
    quadrant = Quadrant.from_area_code(_digit(meshcode, text, 0, _AREA))

    lat_terms, lon_terms, divisors = _decode_terms(meshcode, text, quadrant, extension)
    lat0 = lat_terms[0]
    long0 = lon_terms[0]
    for lat_term, lon_term in zip(lat_terms[1:], lon_terms[1:]):
        lat0 = lat0 + lat_term
        long0 = long0 + lon_term
    lat0 = quadrant.lat_sign * lat0
    long0 = quadrant.lon_sign * long0

    dlat = _lat_term(1, divisors)
    dlong = _lon_term(1, divisors)
    logger.debug("Decoded %s as level %s (area %d)", text, level.name, quadrant.o)
    return BoundingBox(
        lat0=truncate_coordinate(lat0),
        long0=truncate_coordinate(long0),
        lat1=truncate_coordinate(lat0 - dlat),
        long1=truncate_coordinate(long0 + dlong),
    )


def decode(meshcode: MeshCode, extension: bool = False) -> BoundingBox:
    """Alias of :func:`meshcode_to_latlong_grid`."""
    return meshcode_to_latlong_grid(meshcode, extension)


def meshcode_to_latlong(meshcode: MeshCode, extension: bool = False) -> GeoPoint:
    """Return the north-west corner of a grid square."""
    return meshcode_to_latlong_grid(meshcode, extension).nw


def meshcode_to_latlong_nw(meshcode: MeshCode, extension: bool = False) -> GeoPoint:
    return meshcode_to_latlong_grid(meshcode, extension).nw


def meshcode_to_latlong_sw(meshcode: MeshCode, extension: bool = False) -> GeoPoint:
    return meshcode_to_latlong_grid(meshcode, extension).sw


def meshcode_to_latlong_ne(meshcode: MeshCode, extension: bool = False) -> GeoPoint:
    return meshcode_to_latlong_grid(meshcode, extension).ne


def meshcode_to_latlong_se(meshcode: MeshCode, extension: bool = False) -> GeoPoint:
    return meshcode_to_latlong_grid(meshcode, extension).se


def is_valid_meshcode(meshcode: MeshCode, extension: bool = False) -> bool:
    """Whether the code decodes without error."""
    try:
        meshcode_to_latlong_grid(meshcode, extension)
    except (InvalidMeshCode, InvalidDigit):
        return False
    return True
