"""SparkTune: Spark executor sizing from cluster hardware and workload shape."""

from sparktune.api import calculate
from sparktune.engine import AllocationEngine
from sparktune.engine import compute_allocation
from sparktune.models.allocation import AllocationResult
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import StorageFormat
from sparktune.models.cluster_config import WorkloadType

__version__ = "0.1.0"

__all__ = [
    "AllocationEngine",
    "AllocationResult",
    "ClusterConfig",
    "StorageFormat",
    "WorkloadType",
    "calculate",
    "compute_allocation",
]
