"""Quadrant resolution for world grid square codes.

The leading digit of a code (the area code) tells in which of eight
quadrants a position falls: northern or southern hemisphere, eastern or
western hemisphere, and whether the longitude magnitude is below or
above 100 degrees.  Digit extraction always works on magnitudes, so the
resolver also returns the sign-normalised coordinates.
"""

from typing import Tuple

from .models import Quadrant


def resolve_quadrant(latitude: float, longitude: float) -> Quadrant:
    """Map a signed position to its quadrant.

    Parameters
    ----------
    latitude, longitude : float
        Position in decimal degrees.

    Returns
    -------
    Quadrant
        Area code 1..8 and the derived ``x`` (south), ``y`` (west) and
        ``z`` (longitude magnitude >= 100) bits.
    """
    o = 4 if latitude < 0.0 else 0
    if longitude < 0.0:
        o += 2
    if abs(longitude) >= 100.0:
        o += 1
    z = o % 2
    y = ((o - z) // 2) % 2
    x = (o - 2 * y - z) // 4
    return Quadrant(o=o + 1, x=x, y=y, z=z)


def normalize(latitude: float, longitude: float) -> Tuple[Quadrant, float, float]:
    """Resolve the quadrant and fold the position onto non-negative magnitudes."""
    quadrant = resolve_quadrant(latitude, longitude)
    return quadrant, quadrant.lat_sign * latitude, quadrant.lon_sign * longitude
