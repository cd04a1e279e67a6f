"""Configuration loader.

Reads YAML configuration files into plain dictionaries.  Configuration
files live in the `configs/` directory at the project root.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "worldmesh.yaml"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    path : str, optional
        Path to the YAML file.  Defaults to ``configs/worldmesh.yaml``.

    Returns
    -------
    dict
        Parsed configuration.  Returns an empty dict if the file does
        not exist or is empty.

    Raises
    ------
    ValueError
        If the file does not hold a mapping at its top level.
    """
    cfg_path = Path(path) if path else DEFAULT_CONFIG
    if not cfg_path.is_file():
        return {}
    with open(cfg_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{cfg_path}: expected a mapping, got {type(data).__name__}")
    return data
