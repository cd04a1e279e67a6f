"""Tabular export of grid squares.

Grid squares are collected into a pandas DataFrame with one row per
code, holding the decoded corners and optionally the representative
lengths and area.  Tables can be written to Parquet or CSV for later
retrieval.
"""

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from .area import cal_area_from_latlong
from .decoder import MeshCode, mesh_level, meshcode_to_latlong_grid
from .geodesic import CONVERGENCE_TOLERANCE, MAX_ITERATIONS
from ..utils.logging import get_logger

logger = get_logger(__name__)

TABLE_NAME = "meshcells"

CORNER_COLUMNS = ["lat0", "long0", "lat1", "long1"]
METRIC_COLUMNS = ["W1", "W2", "H", "A"]


def cells_to_dataframe(
    codes: Iterable[MeshCode],
    extension: bool = False,
    with_metrics: bool = True,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> pd.DataFrame:
    """Decode grid square codes into a table.

    Parameters
    ----------
    codes : iterable of int or str
        Grid square codes.
    extension : bool, optional
        Read 13-digit codes as extended 100 m codes.
    with_metrics : bool, optional
        Add the W1, W2, H and A columns.
    max_iterations, tolerance : optional
        Passed to :func:`~src.worldmesh.geodesic.vincenty` for the metrics.

    Returns
    -------
    pandas.DataFrame
        Columns ``meshcode``, ``level``, the four corners and, when
        requested, the metric columns.
    """
    rows: List[dict] = []
    for code in codes:
        box = meshcode_to_latlong_grid(code, extension)
        row = {"meshcode": int(code), "level": mesh_level(code, extension).name, **box.to_dict()}
        if with_metrics:
            metrics = cal_area_from_latlong(box, max_iterations, tolerance)
            row.update({"W1": metrics.w1, "W2": metrics.w2, "H": metrics.h, "A": metrics.area})
        rows.append(row)

    columns = ["meshcode", "level"] + CORNER_COLUMNS + (METRIC_COLUMNS if with_metrics else [])
    df = pd.DataFrame(rows, columns=columns)
    return df.astype({"meshcode": "int64"})


def export_cells_to_parquet(df: pd.DataFrame, output_dir: Path) -> Path:
    """Write a cell table to ``<output_dir>/meshcells.parquet``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{TABLE_NAME}.parquet"
    df.to_parquet(path, index=False)
    logger.info("Wrote %d cells to %s", len(df), path)
    return path


def export_cells_to_csv(df: pd.DataFrame, output_dir: Path) -> Path:
    """Write a cell table to ``<output_dir>/meshcells.csv``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{TABLE_NAME}.csv"
    df.to_csv(path, index=False)
    logger.info("Wrote %d cells to %s", len(df), path)
    return path


def load_cells(path: Path) -> pd.DataFrame:
    """Read a cell table written by one of the export functions."""
    path = Path(path)
    if path.is_dir():
        candidates = sorted(path.glob(f"{TABLE_NAME}.*"))
        if not candidates:
            raise FileNotFoundError(f"no {TABLE_NAME} table in {path}")
        path = candidates[0]
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        return pd.read_csv(path, dtype={"meshcode": "int64", "level": str})
    raise ValueError(f"unsupported table format: {path.suffix}")
