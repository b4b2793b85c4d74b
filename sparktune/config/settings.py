"""Settings file loading and input bounds.

This module handles user facing configuration:
- Reference input ranges enforced by the CLI, API and MCP surfaces
- YAML settings file loading (cluster defaults and log level)
- Bounds validation with readable messages

The engine itself never validates; it trusts callers to stay in range.
"""
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

import yaml

from sparktune.models.cluster_config import ClusterConfig


@dataclass(frozen=True)
class Bound:
    minimum: float
    maximum: float
    step: Optional[int] = None


INPUT_BOUNDS: Dict[str, Bound] = {
    "nodes": Bound(minimum=1, maximum=100),
    "cores_per_node": Bound(minimum=2, maximum=128, step=2),
    "ram_per_node": Bound(minimum=8, maximum=512, step=8),
    "data_volume_gb": Bound(minimum=0, maximum=1000),
}


FLAG_FIELDS = ("enable_off_heap",)


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but `nodes: true` is not a node count
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_types(config: ClusterConfig) -> List[str]:
    """Return one message per field holding a value of the wrong type."""
    errors = []
    for name in INPUT_BOUNDS:
        value = getattr(config, name)
        if not _is_number(value):
            errors.append(f"{name} must be a number, got {value!r}")
    for name in FLAG_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, bool):
            errors.append(f"{name} must be true or false, got {value!r}")
    return errors


@dataclass
class Settings:
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    log_level: str = "WARNING"


def load_settings(path: Union[str, Path]) -> Settings:
    """Load a YAML settings file.

    Expected layout::

        cluster:
          nodes: 10
          coresPerNode: 16
        logging:
          level: INFO
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with path.open() as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse settings file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    cluster_data: Dict[str, Any] = raw.get("cluster") or {}
    logging_data: Dict[str, Any] = raw.get("logging") or {}
    try:
        cluster = ClusterConfig.from_dict(cluster_data)
    except TypeError as e:
        raise ValueError(f"Invalid cluster section in {path}: {e}") from e
    except ValueError as e:
        raise ValueError(f"Invalid cluster value in {path}: {e}") from e

    errors = check_types(cluster)
    if errors:
        raise ValueError(f"Invalid cluster value in {path}: {'; '.join(errors)}")

    return Settings(
        cluster=cluster,
        log_level=str(logging_data.get("level", Settings.log_level)).upper(),
    )


def validate_bounds(config: ClusterConfig) -> List[str]:
    """Return one message per field of the wrong type or outside its reference range."""
    errors = check_types(config)
    for name, bound in INPUT_BOUNDS.items():
        value = getattr(config, name)
        if not _is_number(value):
            continue
        if value < bound.minimum or value > bound.maximum:
            errors.append(
                f"{name} must be between {bound.minimum} and {bound.maximum}, got {value}"
            )
        elif bound.step and value % bound.step != 0:
            errors.append(f"{name} must be a multiple of {bound.step}, got {value}")
    return errors


def ensure_within_bounds(config: ClusterConfig) -> ClusterConfig:
    errors = validate_bounds(config)
    if errors:
        raise ValueError("; ".join(errors))
    return config
