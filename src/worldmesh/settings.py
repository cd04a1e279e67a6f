"""Typed settings for the command-line tools.

Settings are read from a YAML file laid out in sections::

    encoding:
      level: 3
      extension: false
    geodesic:
      max_iterations: 200
      tolerance: 1.0e-12
    export:
      format: csv
    logging:
      level: INFO

Missing keys fall back to the dataclass defaults.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .geodesic import CONVERGENCE_TOLERANCE, MAX_ITERATIONS
from .models import DIGITS_BY_LEVEL
from ..utils.config import load_config

OUTPUT_FORMATS = ("csv", "parquet")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class MeshSettings:
    """Defaults used by the CLI."""

    level: int = 3
    """Standard level used when encoding (1..6)."""

    extension: bool = False
    """Whether 13-digit codes are extended 100 m codes."""

    max_iterations: int = MAX_ITERATIONS
    """Bound on Vincenty's iteration."""

    tolerance: float = CONVERGENCE_TOLERANCE
    """Convergence threshold of Vincenty's iteration (radians)."""

    output_format: str = "csv"
    """Table format written by the batch command."""

    log_level: str = "INFO"

    def __post_init__(self):
        if self.level not in DIGITS_BY_LEVEL:
            raise ValueError(f"level must be between 1 and 6, got {self.level!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if self.tolerance <= 0.0:
            raise ValueError("tolerance must be positive")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeshSettings":
        encoding = data.get("encoding") or {}
        geodesic = data.get("geodesic") or {}
        export = data.get("export") or {}
        logging_cfg = data.get("logging") or {}
        return cls(
            level=int(encoding.get("level", cls.level)),
            extension=bool(encoding.get("extension", cls.extension)),
            max_iterations=int(geodesic.get("max_iterations", cls.max_iterations)),
            tolerance=float(geodesic.get("tolerance", cls.tolerance)),
            output_format=str(export.get("format", cls.output_format)),
            log_level=str(logging_cfg.get("level", cls.log_level)).upper(),
        )


def load_settings(path: Optional[str] = None) -> MeshSettings:
    """Load settings from a YAML file (``configs/worldmesh.yaml`` by default)."""
    return MeshSettings.from_dict(load_config(path))
