"""Geodesic distance on the WGS84 ellipsoid.

Implements the inverse problem of

    T. Vincenty, "Direct and Inverse Solutions of Geodesics on the
    Ellipsoid with application of nested equations", Survey Review
    XXIII, No. 176 (1975), pp. 88-93.

The auxiliary longitude lambda is iterated until it changes by no more
than `tolerance`.  The iteration is known not to converge for some
nearly antipodal pairs, so it is bounded by `max_iterations` and raises
:class:`~src.worldmesh.exceptions.ConvergenceError` when exhausted.
"""

import math

from .exceptions import ConvergenceError
from .models import GeoPoint
from ..utils.logging import get_logger

logger = get_logger(__name__)

WGS84_A = 6378137.0
"""Semi-major axis in metres."""

WGS84_B = 6356752.314245
"""Semi-minor axis in metres."""

WGS84_F = 1 / 298.257223563
"""Flattening."""

CONVERGENCE_TOLERANCE = 1e-12
MAX_ITERATIONS = 200


def vincenty(
    latitude1: float,
    longitude1: float,
    latitude2: float,
    longitude2: float,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> float:
    """Compute the geodesic distance between two positions.

    Parameters
    ----------
    latitude1, longitude1 : float
        First position in decimal degrees.
    latitude2, longitude2 : float
        Second position in decimal degrees.
    max_iterations : int, optional
        Upper bound on the number of lambda updates.
    tolerance : float, optional
        Convergence threshold on the change of lambda (radians).

    Returns
    -------
    float
        Distance in metres along the ellipsoid.

    Raises
    ------
    ConvergenceError
        If lambda has not converged after `max_iterations` updates.
    """
    if max_iterations < 1:
        raise ValueError("max_iterations must be at least 1")
    f, a, b = WGS84_F, WGS84_A, WGS84_B

    L = math.radians(longitude1 - longitude2)
    U1 = math.atan((1.0 - f) * math.tan(math.radians(latitude1)))
    U2 = math.atan((1.0 - f) * math.tan(math.radians(latitude2)))
    sin_u1, cos_u1 = math.sin(U1), math.cos(U1)
    sin_u2, cos_u2 = math.sin(U2), math.cos(U2)

    lam = L
    dlam = math.inf
    sin_sigma = cos_sigma = sigma = cos2_alpha = cos2_sigma_m = 0.0
    iterations = 0
    while iterations < max_iterations:
        iterations += 1
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        cs = cos_u2 * sin_lam
        cscc = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam
        sin_sigma = math.sqrt(cs * cs + cscc * cscc)
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        if sin_sigma == 0.0:
            # Coincident points
            return 0.0
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos2_alpha = 1.0 - sin_alpha * sin_alpha
        if cos2_alpha == 0.0:
            # Equatorial line
            cos2_sigma_m = 0.0
            lam_next = L + f * sin_alpha * sigma
        else:
            cos2_sigma_m = cos_sigma - 2.0 * sin_u1 * sin_u2 / cos2_alpha
            C = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
            lam_next = L + (1.0 - C) * f * sin_alpha * (
                sigma + C * sin_sigma * (cos2_sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos2_sigma_m * cos2_sigma_m))
            )
        dlam = lam_next - lam
        lam = lam_next
        if abs(dlam) <= tolerance:
            break
    else:
        raise ConvergenceError(iterations, abs(dlam))

    logger.debug("Vincenty converged after %d iterations", iterations)
    if cos2_alpha == 0.0:
        A = 1.0
        dsigma = 0.0
    else:
        u2 = cos2_alpha * (a * a - b * b) / (b * b)
        A = 1.0 + u2 / 16384.0 * (4096.0 + u2 * (-768.0 + u2 * (320.0 - 175.0 * u2)))
        B = u2 / 1024.0 * (256.0 + u2 * (-128.0 + u2 * (74.0 - 47.0 * u2)))
        dsigma = B * sin_sigma * (
            cos2_sigma_m + 1.0 / 4.0 * B * (
                cos_sigma * (-1.0 + 2.0 * cos2_sigma_m * cos2_sigma_m)
                - 1.0 / 6.0 * B * cos2_sigma_m * (-3.0 + 4.0 * sin_sigma * sin_sigma)
                * (-3.0 + 4.0 * cos2_sigma_m * cos2_sigma_m)
            )
        )
    return b * A * (sigma - dsigma)


def geodesic_distance(
    p1: GeoPoint,
    p2: GeoPoint,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> float:
    """Distance in metres between two :class:`GeoPoint` values."""
    return vincenty(p1.latitude, p1.longitude, p2.latitude, p2.longitude,
                    max_iterations=max_iterations, tolerance=tolerance)
