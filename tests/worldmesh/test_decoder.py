"""Unit tests for the mesh code decoder."""

import pytest

from src.worldmesh.decoder import (
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
from src.worldmesh.encoder import cal_meshcode_ex100, encode
from src.worldmesh.exceptions import InvalidDigit, InvalidMeshCode, WorldMeshError
from src.worldmesh.models import LEVELS, BoundingBox, GeoPoint

TOKYO = (35.590676, 139.671488)

# Tokyo mirrored into each of the eight quadrants.
POSITIONS = [
    (35.590676, 139.671488),
    (35.590676, 39.671488),
    (35.590676, -139.671488),
    (35.590676, -39.671488),
    (-35.590676, 139.671488),
    (-35.590676, 39.671488),
    (-35.590676, -139.671488),
    (-35.590676, -39.671488),
]


class TestOriginCell:
    """Test suite for the 125 m square at the origin."""

    def test_corners(self):
        """Test the corners of 1000000000111."""
        box = meshcode_to_latlong_grid(1000000000111, extension=False)
        assert box.lat0 == 0.0010416
        assert box.long0 == 0.0
        assert box.lat1 == 0.0
        assert box.long1 == 0.0015625

    def test_80km_square(self):
        """Test the 80 km square at the origin."""
        box = meshcode_to_latlong_grid(100000)
        assert box.lat0 == 0.6666666
        assert box.long0 == 0.0
        assert box.lat1 == 0.0
        assert box.long1 == 1.0

    def test_80km_square_south_west(self):
        """Test an 80 km square touching the origin from the south-west."""
        box = meshcode_to_latlong_grid(encode(-0.1, -0.1, level=1))
        assert box.lat0 == 0.0
        assert box.long0 == -1.0
        assert box.lat1 == pytest.approx(-0.666666)
        assert box.long1 == 0.0
        assert box.contains(-0.1, -0.1)


class TestTokyoCells:
    """Test suite for squares around the reference position."""

    def test_1km_square(self):
        """Test the corners of the 1 km square."""
        box = meshcode_to_latlong_grid(2053393503)
        assert box.lat0 == pytest.approx(35.5916666, abs=1e-6)
        assert box.lat1 == pytest.approx(35.5833333, abs=1e-6)
        assert box.long0 == pytest.approx(139.6625, abs=1e-6)
        assert box.long1 == pytest.approx(139.675, abs=1e-6)

    def test_125m_square(self):
        """Test the corners of the 125 m square."""
        box = meshcode_to_latlong_grid(2053393503434)
        assert box.lat0 == pytest.approx(35.5916666, abs=1e-6)
        assert box.lat1 == pytest.approx(35.590625, abs=1e-6)
        assert box.long0 == pytest.approx(139.6703125, abs=1e-6)
        assert box.long1 == pytest.approx(139.671875, abs=1e-6)

    def test_extended_square(self):
        """Test the corners of the extended 100 m square."""
        box = meshcode_to_latlong_grid(2053393503432, extension=True)
        assert box.lat0 == pytest.approx(35.5908333, abs=1e-6)
        assert box.lat1 == pytest.approx(35.59, abs=1e-6)
        assert box.long0 == pytest.approx(139.67125, abs=1e-6)
        assert box.long1 == pytest.approx(139.6725, abs=1e-6)
        assert box.contains(*TOKYO)

    def test_extension_flag_changes_meaning(self):
        """Test that the same 13 digits decode differently on each track."""
        standard = meshcode_to_latlong_grid(2053393503432, extension=False)
        extended = meshcode_to_latlong_grid(2053393503432, extension=True)
        assert standard != extended
        assert standard.height == pytest.approx(LEVELS["6"].dlat, abs=1e-6)
        assert extended.height == pytest.approx(LEVELS["6-ext"].dlat, abs=1e-6)

    def test_extension_ignored_for_short_codes(self):
        """Test that the extension flag has no effect below 13 digits."""
        assert meshcode_to_latlong_grid(2053393503, extension=True) == meshcode_to_latlong_grid(2053393503)

    def test_south_west_1km_square(self):
        """Test the mirrored square in the south-western quadrant."""
        box = meshcode_to_latlong_grid(8053393503)
        assert box.lat0 == pytest.approx(-35.58333, abs=1e-5)
        assert box.lat1 == pytest.approx(-35.59166, abs=1e-5)
        assert box.long0 == pytest.approx(-139.675, abs=2e-4)
        assert box.long1 == pytest.approx(-139.6625, abs=2e-4)


class TestResolutionLaw:
    """Test suite for the relation between digit count and cell size."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_standard_levels(self, level):
        """Test that each level decodes to its nominal size."""
        code = encode(*TOKYO, level=level)
        expected = LEVELS[str(level)]
        box = meshcode_to_latlong_grid(code)
        assert mesh_level(code) == expected
        assert len(str(code)) == expected.digits
        assert box.height == pytest.approx(expected.dlat, abs=1e-6)
        assert box.width == pytest.approx(expected.dlong, abs=1e-6)

    def test_extended_level(self):
        """Test the extended 100 m level."""
        code = cal_meshcode_ex100(*TOKYO)
        assert mesh_level(code, extension=True).name == "6-ext"
        assert mesh_level(code).name == "6"
        box = meshcode_to_latlong_grid(code, extension=True)
        assert box.height == pytest.approx(3.0 / 3600.0, abs=1e-6)
        assert box.width == pytest.approx(4.5 / 3600.0, abs=1e-6)


class TestContainment:
    """Test suite for encode-then-decode containment."""

    @pytest.mark.parametrize("lat, lon", POSITIONS)
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_standard(self, lat, lon, level):
        """Test that the decoded square contains the encoded position."""
        box = meshcode_to_latlong_grid(encode(lat, lon, level=level))
        assert box.lat0 >= box.lat1
        assert box.long1 >= box.long0
        assert box.contains(lat, lon, tolerance=1e-4)

    @pytest.mark.parametrize("lat, lon", POSITIONS)
    def test_extended(self, lat, lon):
        """Test containment for extended 100 m codes."""
        box = meshcode_to_latlong_grid(cal_meshcode_ex100(lat, lon), extension=True)
        assert box.lat0 >= box.lat1
        assert box.long1 >= box.long0
        assert box.contains(lat, lon, tolerance=1e-4)

    @pytest.mark.parametrize("lat, lon", POSITIONS)
    def test_area_code_matches_quadrant(self, lat, lon):
        """Test that the decoded corner has the position's signs."""
        box = meshcode_to_latlong_grid(encode(lat, lon, level=3))
        center = box.center
        assert (center.latitude > 0) == (lat > 0)
        assert (center.longitude > 0) == (lon > 0)


class TestFieldParsing:
    """Test suite for text input and field disambiguation."""

    def test_string_and_int_agree(self):
        """Test that a digit string decodes like the integer."""
        assert meshcode_to_latlong_grid("2053393503") == meshcode_to_latlong_grid(2053393503)
        assert meshcode_to_latlong_grid(" 1000000000 ") == meshcode_to_latlong_grid(1000000000)

    def test_short_latitude_index(self):
        """Test a latitude index written with two leading zeros."""
        box = meshcode_to_latlong_grid(200139)
        assert box.lat0 == pytest.approx(4.0 / 3.0, abs=1e-6)
        assert box.long0 == 139.0

    def test_two_digit_latitude_index(self):
        """Test a latitude index written with one leading zero."""
        box = meshcode_to_latlong_grid(205339)
        assert box.lat0 == pytest.approx(54 * 2.0 / 3.0, abs=1e-6)

    def test_three_digit_latitude_index(self):
        """Test a latitude index with three significant digits."""
        box = meshcode_to_latlong_grid(112039)
        assert box.lat0 == pytest.approx(121 * 2.0 / 3.0, abs=1e-5)
        assert box.long0 == 39.0

    def test_short_longitude_index(self):
        """Test a longitude index written with a leading zero."""
        box = meshcode_to_latlong_grid(105305)
        assert box.long0 == 5.0
        assert box.long1 == 6.0


class TestCornerAccessors:
    """Test suite for the corner helper functions."""

    def test_corners(self):
        """Test that each accessor picks the right pair."""
        box = meshcode_to_latlong_grid(2053393503)
        assert meshcode_to_latlong_nw(2053393503) == GeoPoint(box.lat0, box.long0)
        assert meshcode_to_latlong_sw(2053393503) == GeoPoint(box.lat1, box.long0)
        assert meshcode_to_latlong_ne(2053393503) == GeoPoint(box.lat0, box.long1)
        assert meshcode_to_latlong_se(2053393503) == GeoPoint(box.lat1, box.long1)

    def test_default_point_is_north_west(self):
        """Test that meshcode_to_latlong returns the north-west corner."""
        assert meshcode_to_latlong(2053393503) == meshcode_to_latlong_nw(2053393503)

    def test_extension_passed_through(self):
        """Test that accessors honour the extension flag."""
        box = meshcode_to_latlong_grid(2053393503432, extension=True)
        assert meshcode_to_latlong_ne(2053393503432, extension=True) == box.ne
        assert meshcode_to_latlong_se(2053393503432, extension=True) == box.se

    def test_decode_alias(self):
        """Test that decode is meshcode_to_latlong_grid."""
        assert decode(2053393503) == meshcode_to_latlong_grid(2053393503)
        assert isinstance(decode(2053393503), BoundingBox)


class TestInvalidCodes:
    """Test suite for malformed codes and digits."""

    @pytest.mark.parametrize("code", [12345, "12345", "", 1234567, 123456789, 12345678901234])
    def test_bad_length(self, code):
        """Test that codes with no level are rejected."""
        with pytest.raises(InvalidMeshCode):
            meshcode_to_latlong_grid(code)

    @pytest.mark.parametrize("code", ["12a456", "20533935.3", -2053393503, 2053393503.0, None, True])
    def test_bad_content(self, code):
        """Test that non-digit content is rejected."""
        with pytest.raises(InvalidMeshCode):
            meshcode_to_latlong_grid(code)

    @pytest.mark.parametrize("code, position, value", [
        ("900000", 0, 9),
        ("000000", 0, 0),
        ("10000080", 6, 8),
        ("10000008", 7, 8),
        ("10000000005", 10, 5),
        ("100000000010", 11, 0),
        ("1000000000115", 12, 5),
    ])
    def test_bad_digit(self, code, position, value):
        """Test that out-of-range digits are reported with their position."""
        with pytest.raises(InvalidDigit) as excinfo:
            meshcode_to_latlong_grid(code)
        assert excinfo.value.position == position
        assert excinfo.value.value == value

    @pytest.mark.parametrize("code, position", [
        ("1000000000500", 10),
        ("1000000000150", 11),
        ("1000000000105", 12),
    ])
    def test_bad_extended_digit(self, code, position):
        """Test digit ranges on the extended track."""
        with pytest.raises(InvalidDigit) as excinfo:
            meshcode_to_latlong_grid(code, extension=True)
        assert excinfo.value.position == position

    def test_extended_allows_zero(self):
        """Test that 0 is a valid extended digit but not a quadrant digit."""
        assert is_valid_meshcode(1000000000100, extension=True)
        assert not is_valid_meshcode(1000000000100, extension=False)

    def test_errors_are_value_errors(self):
        """Test the exception hierarchy."""
        assert issubclass(InvalidMeshCode, ValueError)
        assert issubclass(InvalidDigit, ValueError)
        assert issubclass(InvalidMeshCode, WorldMeshError)
        assert issubclass(InvalidDigit, WorldMeshError)

    def test_is_valid_meshcode(self):
        """Test the boolean validity check."""
        assert is_valid_meshcode(2053393503)
        assert not is_valid_meshcode(12345)
        assert not is_valid_meshcode("1000000000151")
