from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Dict
from typing import List


@dataclass
class ExecutorLayout:
    usable_cores_per_node: int
    usable_ram_per_node: float
    executor_cores: int
    executors_per_node: int


@dataclass
class MemorySplit:
    """Per-executor memory in GB. ``total_memory_per_executor`` is unrounded."""

    total_memory_per_executor: float
    overhead_factor: float
    memory_overhead: float
    off_heap_memory: float
    executor_memory: float


@dataclass
class PartitionPlan:
    total_executors: int
    default_parallelism: int
    shuffle_partitions: int
    advisory_partition_size: str


@dataclass
class FormulaStep:
    label: str
    formula: str
    value: str


@dataclass
class MemoryShares:
    """Percent of the executor container taken by each memory region."""

    overhead_pct: float
    off_heap_pct: float
    heap_pct: float


@dataclass
class AllocationResult:
    """
    Data class to hold the full allocation plan for one cluster configuration.
    """

    # Executor layout
    total_executors: int
    executor_cores: int
    executors_per_node: int

    # Memory per executor, GB
    executor_memory: float
    memory_overhead: float
    off_heap_memory: float
    total_memory_per_executor: float

    # Cluster-wide parallelism
    default_parallelism: int
    shuffle_partitions: int
    advisory_partition_size: str

    generated_config: str
    warnings: List[str] = field(default_factory=list)
    critical_warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.critical_warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
