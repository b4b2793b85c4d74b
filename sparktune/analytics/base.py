from abc import ABC
from abc import abstractmethod

from sparktune.models.allocation import ExecutorLayout
from sparktune.models.allocation import MemorySplit
from sparktune.models.allocation import PartitionPlan
from sparktune.models.cluster_config import ClusterConfig


class BaseExecutorStrategy(ABC):
    """Abstract base class for all executor sizing strategies."""

    @abstractmethod
    def size_executors(self, config: ClusterConfig) -> ExecutorLayout:
        """Decides cores per executor and executors per node."""
        pass


class BaseMemoryStrategy(ABC):
    """Abstract base class for all executor memory strategies."""

    @abstractmethod
    def split_memory(
        self, config: ClusterConfig, layout: ExecutorLayout
    ) -> MemorySplit:
        """Splits the per-executor memory budget into heap, overhead and off-heap."""
        pass


class BasePartitionStrategy(ABC):
    """Abstract base class for cluster totals and partition sizing strategies."""

    @abstractmethod
    def recommend_partitions(
        self, config: ClusterConfig, layout: ExecutorLayout, executor_memory: float
    ) -> PartitionPlan:
        """Derives executor totals, parallelism and shuffle partitions."""
        pass
