"""Encode WGS84 positions as world grid square codes.

The code is built by repeatedly splitting the sign-normalised latitude
and longitude into nested blocks:

==========  ==============  ===============  ======
level       latitude step   longitude step   digits
==========  ==============  ===============  ======
80 km       40'             1 deg            6
10 km       5'              7.5'             8
1 km        30"             45"              10
500 m       15"             22.5"            11
250 m       7.5"            11.25"           12
125 m       3.75"           5.625"           13
100 m ext.  3"              4.5"             13
==========  ==============  ===============  ======

The three finest standard levels each contribute a single quadrant
digit (SW=1, SE=2, NW=3, NE=4).  The extended 100 m code instead ends
with a latitude/longitude digit pair (0..4 each) inside the 500 m cell.
"""

import math
from typing import Iterable

import numpy as np

from .models import DIGITS_BY_LEVEL
from .quadrant import normalize
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _check_finite(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError(f"cannot encode non-finite position ({latitude}, {longitude})")


def _prefix(o: int, p: int, u: int) -> str:
    # p is always three characters wide; u is padded to two only below 10.
    if u < 10:
        return f"{o}{p:03d}0{u}"
    return f"{o}{p:03d}{u}"


def _full_code(latitude: float, longitude: float) -> str:
    """Return the 13-character 125 m expansion of a position."""
    _check_finite(latitude, longitude)
    quadrant, latitude, longitude = normalize(latitude, longitude)

    p = math.floor(latitude * 60 / 40)
    a = (latitude * 60 / 40 - p) * 40
    q = math.floor(a / 5)
    b = (a / 5 - q) * 5
    r = math.floor(b * 60 / 30)
    c = (b * 60 / 30 - r) * 30
    s2u = math.floor(c / 15)
    d = (c / 15 - s2u) * 15
    s4u = math.floor(d / 7.5)
    e = (d / 7.5 - s4u) * 7.5
    s8u = math.floor(e / 3.75)

    u = math.floor(longitude - 100 * quadrant.z)
    f = longitude - 100 * quadrant.z - u
    v = math.floor(f * 60 / 7.5)
    g = (f * 60 / 7.5 - v) * 7.5
    w = math.floor(g * 60 / 45)
    h = (g * 60 / 45 - w) * 45
    s2l = math.floor(h / 22.5)
    i = (h / 22.5 - s2l) * 22.5
    s4l = math.floor(i / 11.25)
    j = (i / 11.25 - s4l) * 11.25
    s8l = math.floor(j / 5.625)

    s2 = s2u * 2 + s2l + 1
    s4 = s4u * 2 + s4l + 1
    s8 = s8u * 2 + s8l + 1
    return f"{_prefix(quadrant.o, p, u)}{q}{v}{r}{w}{s2}{s4}{s8}"


def cal_meshcode6(latitude: float, longitude: float) -> int:
    """Calculate the 125 m grid square code (13 digits) of a position."""
    return int(_full_code(latitude, longitude))


def cal_meshcode1(latitude: float, longitude: float) -> int:
    """Calculate the 80 km grid square code (6 digits)."""
    return int(_full_code(latitude, longitude)[:6])


def cal_meshcode2(latitude: float, longitude: float) -> int:
    """Calculate the 10 km grid square code (8 digits)."""
    return int(_full_code(latitude, longitude)[:8])


def cal_meshcode3(latitude: float, longitude: float) -> int:
    """Calculate the 1 km grid square code (10 digits)."""
    return int(_full_code(latitude, longitude)[:10])


def cal_meshcode4(latitude: float, longitude: float) -> int:
    """Calculate the 500 m grid square code (11 digits)."""
    return int(_full_code(latitude, longitude)[:11])


def cal_meshcode5(latitude: float, longitude: float) -> int:
    """Calculate the 250 m grid square code (12 digits)."""
    return int(_full_code(latitude, longitude)[:12])


def cal_meshcode(latitude: float, longitude: float) -> int:
    """Calculate the basic 1 km grid square code (10 digits)."""
    return cal_meshcode3(latitude, longitude)


def cal_meshcode_ex100(latitude: float, longitude: float) -> int:
    """Calculate the extended 100 m grid square code (13 digits).

    The cell measures 3 arc-seconds of latitude by 4.5 arc-seconds of
    longitude.  The code shares its first 11 digits with the 500 m code;
    the last two digits give the row and column (0..4) inside the 500 m
    cell.  It is not a truncation of :func:`cal_meshcode6`.
    """
    _check_finite(latitude, longitude)
    quadrant, latitude, longitude = normalize(latitude, longitude)

    p = math.floor(latitude * 60 / 40)
    a = (latitude * 60 / 40 - p) * 40
    q = math.floor(a / 5)
    b = (a / 5 - q) * 5
    r = math.floor(b * 60 / 30)
    c = (b * 60 / 30 - r) * 30
    s2u = math.floor(c / 15)
    d = (c / 15 - s2u) * 15
    et = math.floor(d / 3)

    u = math.floor(longitude - 100 * quadrant.z)
    f = longitude - 100 * quadrant.z - u
    v = math.floor(f * 60 / 7.5)
    g = (f * 60 / 7.5 - v) * 7.5
    w = math.floor(g * 60 / 45)
    h = (g * 60 / 45 - w) * 45
    s2l = math.floor(h / 22.5)
    i = (h / 22.5 - s2l) * 22.5
    jt = math.floor(i / 4.5)

    s2 = s2u * 2 + s2l + 1
    return int(f"{_prefix(quadrant.o, p, u)}{q}{v}{r}{w}{s2}{et}{jt}")


def encode(latitude: float, longitude: float, level: int = 3) -> int:
    """Encode a position at one of the six standard levels.

    Parameters
    ----------
    latitude, longitude : float
        Position in decimal degrees.
    level : int, optional
        1 (80 km) to 6 (125 m).  Default is 3 (1 km).

    Returns
    -------
    int
        The grid square code.
    """
    if level not in DIGITS_BY_LEVEL:
        raise ValueError(f"level must be one of {sorted(DIGITS_BY_LEVEL)}, got {level!r}")
    return int(_full_code(latitude, longitude)[:DIGITS_BY_LEVEL[level]])


def encode_extended_100m(latitude: float, longitude: float) -> int:
    """Encode a position as an extended 100 m code."""
    return cal_meshcode_ex100(latitude, longitude)


def encode_points(
    latitudes: Iterable[float],
    longitudes: Iterable[float],
    level: int = 3,
    extension: bool = False,
) -> np.ndarray:
    """Encode arrays of positions.

    Parameters
    ----------
    latitudes, longitudes : array_like
        Positions in decimal degrees; both must have the same length.
    level : int, optional
        Standard level 1..6, ignored when `extension` is set.
    extension : bool, optional
        Produce extended 100 m codes instead.

    Returns
    -------
    numpy.ndarray
        ``int64`` array of codes.
    """
    lats = np.asarray(latitudes, dtype=float).ravel()
    lons = np.asarray(longitudes, dtype=float).ravel()
    if lats.shape != lons.shape:
        raise ValueError("latitudes and longitudes must have the same length")
    if extension:
        codes = (cal_meshcode_ex100(float(lat), float(lon)) for lat, lon in zip(lats, lons))
    else:
        codes = (encode(float(lat), float(lon), level) for lat, lon in zip(lats, lons))
    result = np.fromiter(codes, dtype=np.int64, count=len(lats))
    logger.debug("Encoded %d positions (level=%s, extension=%s)", len(result), level, extension)
    return result
