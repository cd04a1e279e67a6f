"""Fixed-width truncation of decoded coordinates.

Decoded corners are published with a fixed number of characters rather
than a fixed number of decimals: the value is written out with 20
fractional digits and cut (never rounded) after 9, 10 or 11 characters
depending on its magnitude.  Negative values always keep 9 characters,
sign included.  Published codes and coordinates depend on this exact
behaviour, so it must not be replaced by rounding.
"""

from decimal import Decimal


def truncate_coordinate(value: float) -> float:
    """Truncate a coordinate to its published width.

    The decimal expansion is taken from the shortest representation that
    round-trips (``repr``), zero-padded to 20 fractional digits, so that a
    value such as ``0.3`` is not read back as ``0.2999999...``.

    Parameters
    ----------
    value : float
        Latitude or longitude in degrees.

    Returns
    -------
    float
        The truncated value.  Truncating twice gives the same result.
    """
    text = format(Decimal(repr(value)), ".20f")
    if value > 100.0:
        keep = 3 + 8
    elif value > 10.0:
        keep = 2 + 8
    else:
        keep = 1 + 8
    return float(text[:keep])
