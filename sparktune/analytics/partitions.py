import math

from sparktune.config.constants import ADVISORY_PARTITION_SIZE_DEFAULT
from sparktune.config.constants import ADVISORY_PARTITION_SIZE_LARGE
from sparktune.config.constants import DRIVER_EXECUTOR_SLOTS
from sparktune.config.constants import LARGE_PARTITION_HEAP_GB
from sparktune.config.constants import PARALLELISM_FACTOR
from sparktune.config.constants import TARGET_PARTITION_MB
from sparktune.models.allocation import ExecutorLayout
from sparktune.models.allocation import PartitionPlan
from sparktune.models.cluster_config import ClusterConfig
from sparktune.utils.conversions import MB_PER_GB

from .base import BasePartitionStrategy


def shuffle_partitions_for(data_volume_gb: float) -> int:
    """~200MB per shuffle partition, never fewer than one partition."""
    return max(1, math.ceil((data_volume_gb * MB_PER_GB) / TARGET_PARTITION_MB))


class TargetSizePartitionStrategy(BasePartitionStrategy):
    """
    Cluster totals and data-driven partition sizing.

    One executor slot is always given up for the driver, and the executor
    count is floored at 1 so a single-executor cluster still gets a plan.
    """

    def recommend_partitions(
        self, config: ClusterConfig, layout: ExecutorLayout, executor_memory: float
    ) -> PartitionPlan:
        total_executors = max(
            1, layout.executors_per_node * config.nodes - DRIVER_EXECUTOR_SLOTS
        )
        default_parallelism = (
            total_executors * layout.executor_cores * PARALLELISM_FACTOR
        )
        advisory_partition_size = (
            ADVISORY_PARTITION_SIZE_LARGE
            if executor_memory > LARGE_PARTITION_HEAP_GB
            else ADVISORY_PARTITION_SIZE_DEFAULT
        )
        return PartitionPlan(
            total_executors=total_executors,
            default_parallelism=default_parallelism,
            shuffle_partitions=shuffle_partitions_for(config.data_volume_gb),
            advisory_partition_size=advisory_partition_size,
        )
