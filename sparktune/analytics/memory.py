from sparktune.config.constants import MIN_OVERHEAD_MB
from sparktune.config.constants import OFFHEAP_FACTOR
from sparktune.config.constants import OVERHEAD_FACTOR_HEAVY
from sparktune.config.constants import OVERHEAD_FACTOR_STANDARD
from sparktune.models.allocation import ExecutorLayout
from sparktune.models.allocation import MemorySplit
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import WorkloadType
from sparktune.utils.conversions import MB_PER_GB
from sparktune.utils.conversions import round_fixed

from .base import BaseMemoryStrategy

OVERHEAD_FACTORS = {
    WorkloadType.STANDARD: OVERHEAD_FACTOR_STANDARD,
    WorkloadType.HEAVY: OVERHEAD_FACTOR_HEAVY,
}


def overhead_factor(workload_type: WorkloadType) -> float:
    return OVERHEAD_FACTORS[WorkloadType(workload_type)]


class FixedRatioMemoryStrategy(BaseMemoryStrategy):
    """
    Carves overhead and optional off-heap memory out of the executor's share of
    node RAM; the heap gets what is left.

    The heap is reported as computed, even when it goes negative, so callers
    can see how far an infeasible configuration falls short.
    """

    def split_memory(
        self, config: ClusterConfig, layout: ExecutorLayout
    ) -> MemorySplit:
        total_per_executor = layout.usable_ram_per_node / layout.executors_per_node
        factor = overhead_factor(config.workload_type)

        min_overhead = MIN_OVERHEAD_MB / MB_PER_GB
        memory_overhead = round_fixed(max(min_overhead, total_per_executor * factor))

        off_heap_memory = 0.0
        if config.enable_off_heap:
            off_heap_memory = round_fixed(total_per_executor * OFFHEAP_FACTOR)

        executor_memory = round_fixed(
            total_per_executor - memory_overhead - off_heap_memory
        )

        return MemorySplit(
            total_memory_per_executor=total_per_executor,
            overhead_factor=factor,
            memory_overhead=memory_overhead,
            off_heap_memory=off_heap_memory,
            executor_memory=executor_memory,
        )
