"""Input model for the allocation engine.

This module contains the cluster/workload description consumed by the engine:
- WorkloadType: selects the memory overhead ratio
- StorageFormat: table format, drives advisories and the memory fraction flag
- ClusterConfig: immutable hardware + workload configuration
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Dict

from sparktune.utils.conversions import camelcase


class WorkloadType(str, Enum):
    STANDARD = "standard"
    HEAVY = "heavy"


class StorageFormat(str, Enum):
    STANDARD = "standard"
    ICEBERG = "iceberg"
    DELTA = "delta"

    @property
    def label(self) -> str:
        return _STORAGE_LABELS[self]


_STORAGE_LABELS = {
    StorageFormat.STANDARD: "Standard / Parquet / Avro",
    StorageFormat.ICEBERG: "Iceberg",
    StorageFormat.DELTA: "Delta Lake",
}


@camelcase
@dataclass(frozen=True)
class ClusterConfig:
    """Hardware and workload description. RAM and volume are in GB."""

    nodes: int = field(default=10)
    cores_per_node: int = field(default=16)
    ram_per_node: float = field(default=64)
    workload_type: WorkloadType = field(default=WorkloadType.STANDARD)
    storage_format: StorageFormat = field(default=StorageFormat.STANDARD)
    data_volume_gb: float = field(default=100)
    enable_off_heap: bool = field(default=False)

    def __post_init__(self):
        # Accept plain strings coming from CLI args, YAML or JSON
        object.__setattr__(self, "workload_type", WorkloadType(self.workload_type))
        object.__setattr__(self, "storage_format", StorageFormat(self.storage_format))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClusterConfig":
        """Create ClusterConfig from a dictionary with camelCase or snake_case keys."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["workload_type"] = self.workload_type.value
        data["storage_format"] = self.storage_format.value
        return data
