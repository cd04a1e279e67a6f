"""Value types shared by the encoder, decoder and area calculator.

All types are frozen dataclasses: every function in the package returns
a fresh value and never mutates its inputs.  Angles are in decimal
degrees, lengths in metres and areas in square metres.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 position.  No range validation is applied."""

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class Quadrant:
    """Hemisphere / longitude-magnitude quadrant of a position.

    The area code `o` (1..8) is the leading digit of every mesh code.
    """

    o: int
    """Area code, 1..8."""

    x: int
    """1 for the southern hemisphere, else 0."""

    y: int
    """1 for the western hemisphere, else 0."""

    z: int
    """1 when the longitude magnitude is 100 degrees or more, else 0."""

    @property
    def lat_sign(self) -> int:
        return 1 - 2 * self.x

    @property
    def lon_sign(self) -> int:
        return 1 - 2 * self.y

    @classmethod
    def from_area_code(cls, o: int) -> "Quadrant":
        """Rebuild the quadrant bits from an area code 1..8."""
        code0 = o - 1
        z = code0 % 2
        y = ((code0 - z) // 2) % 2
        x = (code0 - 2 * y - z) // 4
        return cls(o=o, x=x, y=y, z=z)


@dataclass(frozen=True)
class MeshLevel:
    """One resolution tier of the mesh code grammar."""

    name: str
    """Level label, e.g. ``"3"`` or ``"6-ext"``."""

    digits: int
    """Number of digits of a code at this level."""

    dlat: float
    """Cell height in degrees."""

    dlong: float
    """Cell width in degrees."""

    description: str


# Cell sizes are built with the same chain of divisions the decoder uses so
# that a level's extent compares equal to the decoded corner spacing.
LEVELS: Dict[str, MeshLevel] = {
    "1": MeshLevel("1", 6, 2.0 / 3.0, 1.0, "80km"),
    "2": MeshLevel("2", 8, 2.0 / 3.0 / 8.0, 1.0 / 8.0, "10km"),
    "3": MeshLevel("3", 10, 2.0 / 3.0 / 8.0 / 10.0, 1.0 / 8.0 / 10.0, "1km"),
    "4": MeshLevel("4", 11, 2.0 / 3.0 / 8.0 / 10.0 / 2.0, 1.0 / 8.0 / 10.0 / 2.0, "500m"),
    "5": MeshLevel("5", 12, 2.0 / 3.0 / 8.0 / 10.0 / 2.0 / 2.0, 1.0 / 8.0 / 10.0 / 2.0 / 2.0, "250m"),
    "6": MeshLevel("6", 13, 2.0 / 3.0 / 8.0 / 10.0 / 2.0 / 2.0 / 2.0, 1.0 / 8.0 / 10.0 / 2.0 / 2.0 / 2.0, "125m"),
    "6-ext": MeshLevel("6-ext", 13, 2.0 / 3.0 / 8.0 / 10.0 / 2.0 / 5.0, 1.0 / 8.0 / 10.0 / 2.0 / 5.0, "100m (extended)"),
}

DIGITS_BY_LEVEL: Dict[int, int] = {1: 6, 2: 8, 3: 10, 4: 11, 5: 12, 6: 13}
"""Number of leading characters kept by ``cal_meshcode1`` .. ``cal_meshcode6``."""


def level_for_digits(ndigits: int, extension: bool = False) -> MeshLevel:
    """Return the level whose codes have `ndigits` digits.

    Raises
    ------
    KeyError
        If no level has that many digits.
    """
    if ndigits == 13 and extension:
        return LEVELS["6-ext"]
    for level, digits in DIGITS_BY_LEVEL.items():
        if digits == ndigits:
            return LEVELS[str(level)]
    raise KeyError(ndigits)


@dataclass(frozen=True)
class BoundingBox:
    """A decoded grid square.

    ``(lat0, long0)`` is the north-west corner and ``(lat1, long1)`` the
    south-east corner, so ``lat0 >= lat1`` and ``long1 >= long0``.
    """

    lat0: float
    long0: float
    lat1: float
    long1: float

    @property
    def nw(self) -> GeoPoint:
        return GeoPoint(self.lat0, self.long0)

    @property
    def sw(self) -> GeoPoint:
        return GeoPoint(self.lat1, self.long0)

    @property
    def ne(self) -> GeoPoint:
        return GeoPoint(self.lat0, self.long1)

    @property
    def se(self) -> GeoPoint:
        return GeoPoint(self.lat1, self.long1)

    @property
    def center(self) -> GeoPoint:
        return GeoPoint((self.lat0 + self.lat1) / 2.0, (self.long0 + self.long1) / 2.0)

    @property
    def height(self) -> float:
        """North-south extent in degrees."""
        return self.lat0 - self.lat1

    @property
    def width(self) -> float:
        """West-east extent in degrees."""
        return self.long1 - self.long0

    def contains(self, latitude: float, longitude: float, tolerance: float = 0.0) -> bool:
        """Whether the position lies inside the box, edges included."""
        return (self.lat1 - tolerance <= latitude <= self.lat0 + tolerance
                and self.long0 - tolerance <= longitude <= self.long1 + tolerance)

    def to_dict(self) -> Dict[str, float]:
        return {"lat0": self.lat0, "long0": self.long0, "lat1": self.lat1, "long1": self.long1}


@dataclass(frozen=True)
class CellMetrics:
    """Representative lengths and trapezoid area of a grid square."""

    box: BoundingBox
    """The square the metrics were measured on."""

    w1: float
    """Length of the northern edge (W1) in metres."""

    w2: float
    """Length of the southern edge (W2) in metres."""

    h: float
    """Length of the western edge (H) in metres."""

    area: float
    """Trapezoid approximation ``(W1 + W2) / 2 * H`` in square metres."""

    def to_dict(self) -> Dict[str, float]:
        return {**self.box.to_dict(), "W1": self.w1, "W2": self.w2, "H": self.h, "A": self.area}
