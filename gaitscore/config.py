"""Analysis configuration management.

Supports JSON and YAML config files so that an analysis can be rerun
with the same thresholds.  Configuration is merged against
``DEFAULT_CONFIG`` so partial overrides work seamlessly.  Nothing here is
global: the merged dict is passed explicitly to the analyzers.

Functions
---------
load_config
    Load analysis config from a JSON or YAML file.
save_config
    Save analysis config to a JSON or YAML file.
merge_config
    Merge an in-memory override into the defaults.

Attributes
----------
DEFAULT_CONFIG : dict
    Default values for every analysis stage.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Optional, Union

from .constants import (
    DEFAULT_SAMPLING_RATE_HZ,
    MAX_ACCEPTABLE_CV,
    OUTLIER_SIGMA,
    PEAK_MIN_DISTANCE_S,
    PEAK_MIN_HEIGHT,
    STABILITY_CAPS,
)

logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "sampling_rate_hz": DEFAULT_SAMPLING_RATE_HZ,
    "stability": {
        "caps": dict(STABILITY_CAPS),
    },
    "rhythm": {
        "axis": "z",
        "min_height": PEAK_MIN_HEIGHT,
        "min_distance_s": PEAK_MIN_DISTANCE_S,
        "outlier_sigma": OUTLIER_SIGMA,
        "max_acceptable_cv": MAX_ACCEPTABLE_CV,
    },
}


def merge_config(override: Optional[dict] = None) -> dict:
    """Return ``DEFAULT_CONFIG`` deep-merged with *override*.

    Raises
    ------
    TypeError
        If *override* is not a dict.
    """
    if override is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(override, dict):
        raise TypeError("config must be a dict")
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), override)


def load_config(path: Union[str, Path]) -> dict:
    """Load analysis config from a JSON or YAML file.

    The loaded configuration is merged against ``DEFAULT_CONFIG``
    so partial overrides work correctly.

    Parameters
    ----------
    path : str or Path
        Path to config file (``.json`` or ``.yaml``/``.yml``).

    Returns
    -------
    dict
        Merged configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the config file does not exist.
    ImportError
        If YAML is requested but ``pyyaml`` is not installed.
    ValueError
        If the file content is not a dict.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML configs: pip install pyyaml")
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    else:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)

    if not isinstance(cfg, dict):
        raise ValueError("Config must be a dict")

    merged = merge_config(cfg)
    logger.info(f"Loaded config from {path}")
    return merged


def save_config(config: dict, path: Union[str, Path]) -> str:
    """Save analysis config to a JSON or YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    path : str or Path
        Output file path (``.json`` or ``.yaml``/``.yml``).

    Returns
    -------
    str
        Path to the saved file.

    Raises
    ------
    ImportError
        If YAML is requested but ``pyyaml`` is not installed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML configs: pip install pyyaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    else:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)

    logger.info(f"Saved config to {path}")
    return str(path)


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result
