"""Integration tests for the command-line interface."""

import pandas as pd
import pytest

from src.worldmesh.cli import build_parser, main
from src.worldmesh.export import load_cells


class TestEncodeCommand:
    """Test suite for `encode`."""

    def test_default_level(self, capsys):
        """Test encoding at the configured level."""
        assert main(["encode", "--lat", "35.590676", "--lon", "139.671488"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["Lat=35.590676, Lng=139.671488", "2053393503"]

    def test_explicit_level(self, capsys):
        """Test encoding at the 125 m level."""
        assert main(["encode", "--lat", "35.590676", "--lon", "139.671488", "--level", "6"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "2053393503434"

    def test_extended(self, capsys):
        """Test producing an extended 100 m code."""
        assert main(["encode", "--lat", "35.590676", "--lon", "139.671488", "--extended"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "2053393503432"

    def test_config_file(self, tmp_path, capsys):
        """Test that the settings file supplies the default level."""
        cfg = tmp_path / "worldmesh.yaml"
        cfg.write_text("encoding:\n  level: 1\n")
        assert main(["--config", str(cfg), "encode", "--lat", "35.590676", "--lon", "139.671488"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "205339"

    def test_invalid_config(self, tmp_path):
        """Test that invalid settings stop the command."""
        cfg = tmp_path / "worldmesh.yaml"
        cfg.write_text("encoding:\n  level: 9\n")
        assert main(["--config", str(cfg), "encode", "--lat", "0", "--lon", "0"]) == 1

    def test_level_out_of_range(self):
        """Test that argparse rejects unknown levels."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["encode", "--lat", "0", "--lon", "0", "--level", "7"])


class TestCodeCommands:
    """Test suite for `decode`, `area` and `neighbors`."""

    def test_decode(self, capsys):
        """Test printing the corners of a square."""
        assert main(["decode", "1000000000111"]) == 0
        out = capsys.readouterr().out
        assert "level: 6 (125m)" in out
        assert "NW(0.0, 0.0010416)" in out

    def test_decode_extension(self, capsys):
        """Test decoding an extended code."""
        assert main(["decode", "2053393503432", "--extension"]) == 0
        assert "6-ext" in capsys.readouterr().out

    def test_decode_invalid(self):
        """Test that malformed codes give a non-zero exit status."""
        assert main(["decode", "12345"]) == 1
        assert main(["decode", "900000"]) == 1

    def test_area(self, capsys):
        """Test printing the lengths and area."""
        assert main(["area", "2053393503"]) == 0
        out = capsys.readouterr().out
        for label in ("W1 =", "W2 =", "H  =", "A  ="):
            assert label in out

    def test_neighbors(self, capsys):
        """Test printing the adjacent squares."""
        assert main(["neighbors", "2053393503"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "North: 2053393513",
            "South: 2053392593",
            "East: 2053393504",
            "West: 2053393502",
        ]


class TestTilesCommand:
    """Test suite for `tiles`."""

    def test_tiles(self, capsys):
        """Test listing the squares covering a rectangle."""
        assert main(["tiles", "--bbox", "35.58", "139.66", "35.59", "139.67", "--level", "3"]) == 0
        out = capsys.readouterr().out.split()
        assert out == ["2053392592", "2053392593", "2053393502", "2053393503"]

    def test_inverted_bbox(self):
        """Test that an inverted rectangle gives a non-zero exit status."""
        assert main(["tiles", "--bbox", "35.6", "139.6", "35.5", "139.7"]) == 1


class TestBatchCommand:
    """Test suite for `batch`."""

    @pytest.fixture
    def points_csv(self, tmp_path):
        path = tmp_path / "points.csv"
        pd.DataFrame({
            "latitude": [35.590676, 35.5900, 35.5960],
            "longitude": [139.671488, 139.6700, 139.6710],
        }).to_csv(path, index=False)
        return path

    def test_csv(self, points_csv, tmp_path, capsys):
        """Test encoding a CSV of positions into a cell table."""
        out_dir = tmp_path / "out"
        assert main(["batch", "--input", str(points_csv), "--output", str(out_dir)]) == 0
        assert "3 points in 2 grid squares" in capsys.readouterr().out
        cells = load_cells(out_dir)
        assert cells["meshcode"].tolist() == [2053393503, 2053393513]
        assert cells["point_count"].tolist() == [2, 1]
        assert "A" in cells.columns

    def test_parquet_without_metrics(self, points_csv, tmp_path):
        """Test Parquet output without the metric columns."""
        out_dir = tmp_path / "out"
        argv = ["batch", "--input", str(points_csv), "--output", str(out_dir),
                "--format", "parquet", "--level", "1", "--no-metrics"]
        assert main(argv) == 0
        cells = load_cells(out_dir / "meshcells.parquet")
        assert cells["meshcode"].tolist() == [205339]
        assert cells["point_count"].tolist() == [3]
        assert "A" not in cells.columns

    def test_missing_columns(self, tmp_path):
        """Test that the input must have latitude and longitude columns."""
        path = tmp_path / "bad.csv"
        pd.DataFrame({"lat": [1.0], "lon": [2.0]}).to_csv(path, index=False)
        assert main(["batch", "--input", str(path), "--output", str(tmp_path / "out")]) == 1


class TestSettingsReachCommands:
    """Test suite for settings that change command behaviour."""

    @pytest.fixture
    def one_iteration_config(self, tmp_path):
        path = tmp_path / "worldmesh.yaml"
        path.write_text("geodesic:\n  max_iterations: 1\n")
        return path

    def test_area_honours_iteration_bound(self, one_iteration_config):
        """Test that the area command uses the configured Vincenty bound."""
        assert main(["--config", str(one_iteration_config), "area", "2053393503"]) == 1

    def test_batch_honours_iteration_bound(self, one_iteration_config, tmp_path):
        """Test that the batch command uses the configured Vincenty bound for its metrics."""
        points = tmp_path / "points.csv"
        pd.DataFrame({"latitude": [35.590676], "longitude": [139.671488]}).to_csv(points, index=False)
        argv = ["--config", str(one_iteration_config), "batch",
                "--input", str(points), "--output", str(tmp_path / "out")]
        assert main(argv) == 1

    def test_batch_without_metrics_skips_geodesy(self, one_iteration_config, tmp_path):
        """Test that skipping metrics also skips the distance calculation."""
        points = tmp_path / "points.csv"
        pd.DataFrame({"latitude": [35.590676], "longitude": [139.671488]}).to_csv(points, index=False)
        argv = ["--config", str(one_iteration_config), "batch",
                "--input", str(points), "--output", str(tmp_path / "out"), "--no-metrics"]
        assert main(argv) == 0


class TestLogLevel:
    """Test suite for the logging level options."""

    def test_unknown_level_option(self):
        """Test that argparse rejects an unknown --log-level."""
        with pytest.raises(SystemExit):
            main(["--log-level", "LOUD", "encode", "--lat", "0", "--lon", "0"])

    def test_level_option_is_case_insensitive(self, capsys):
        """Test that --log-level accepts lower-case names."""
        assert main(["--log-level", "debug", "encode", "--lat", "0", "--lon", "0"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "1000000000"
        assert main(["--log-level", "info", "encode", "--lat", "0", "--lon", "0"]) == 0

    def test_unknown_level_in_config(self, tmp_path):
        """Test that an unknown level in the settings file gives a non-zero exit status."""
        cfg = tmp_path / "worldmesh.yaml"
        cfg.write_text("logging:\n  level: LOUD\n")
        assert main(["--config", str(cfg), "encode", "--lat", "0", "--lon", "0"]) == 1
