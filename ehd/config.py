"""
Descriptor configuration

The configuration is an immutable value: a descriptor reads it once and its
cached block grid always matches it. Use ``dataclasses.replace`` (or
``EdgeHistogramDescriptor.with_configuration``) to derive a new one.
"""

import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml


@dataclass(frozen=True)
class EdgeHistogramConfig:
    threshold: float = 50.0  # minimum kernel vote for a cell to count as an edge
    normalize: bool = False
    horizontal_blocks: int = 4  # blocks across the image width (columns)
    vertical_blocks: int = 4  # blocks down the image height (rows)
    n_jobs: int = 1  # joblib workers for the block grid, does not change results

    def __post_init__(self):
        for name in ('horizontal_blocks', 'vertical_blocks', 'n_jobs'):
            value = getattr(self, name)
            try:
                valid = not isinstance(value, bool) and int(value) == value
            except (TypeError, ValueError, OverflowError):
                valid = False
            if not valid:
                raise ValueError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero (1 for serial, -1 for all cores)")

        try:
            threshold = float(self.threshold)
        except (TypeError, ValueError) as e:
            raise ValueError(f"threshold must be a number, got {self.threshold!r}") from e
        if math.isnan(threshold) or threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")
        object.__setattr__(self, 'threshold', threshold)
        object.__setattr__(self, 'normalize', bool(self.normalize))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_dict(values: Mapping[str, Any]) -> EdgeHistogramConfig:
    """
    Build a configuration from a plain mapping

    Args:
        values: Mapping of field names to values; missing fields keep defaults

    Returns:
        EdgeHistogramConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    known = {f.name for f in fields(EdgeHistogramConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown EHD config keys: {', '.join(unknown)}")
    return EdgeHistogramConfig(**dict(values))


def load_config(path: Union[str, Path]) -> EdgeHistogramConfig:
    """
    Load a configuration from a YAML file

    The file may hold the fields at top level or under an ``ehd:`` section.

    Example:
        >>> config = load_config('configs/ehd.yaml')
        >>> config.threshold
        50.0
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")
    if 'ehd' in data:
        data = data['ehd'] or {}

    return config_from_dict(data)


def save_config(config: EdgeHistogramConfig, path: Union[str, Path]) -> None:
    """Write configuration to a YAML file under an ``ehd:`` section"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump({'ehd': config.to_dict()}, f, sort_keys=False)
