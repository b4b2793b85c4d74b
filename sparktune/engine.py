import logging
from typing import Optional

from sparktune.analytics.advisor import AdvisoryRules
from sparktune.analytics.base import BaseExecutorStrategy
from sparktune.analytics.base import BaseMemoryStrategy
from sparktune.analytics.base import BasePartitionStrategy
from sparktune.analytics.executors import RuleOfFiveStrategy
from sparktune.analytics.flags import build_submit_flags
from sparktune.analytics.memory import FixedRatioMemoryStrategy
from sparktune.analytics.partitions import TargetSizePartitionStrategy
from sparktune.models.allocation import AllocationResult
from sparktune.models.cluster_config import ClusterConfig
from sparktune.utils.conversions import round_fixed

logger = logging.getLogger(__name__)


class AllocationEngine:
    """Turns a cluster/workload configuration into a sized executor plan.

    Every call recomputes the plan from scratch and never raises for inputs in
    the supported ranges; problems are reported through the result's warning
    lists instead.
    """

    def __init__(
        self,
        executor_strategy: Optional[BaseExecutorStrategy] = None,
        memory_strategy: Optional[BaseMemoryStrategy] = None,
        partition_strategy: Optional[BasePartitionStrategy] = None,
        advisory_rules: Optional[AdvisoryRules] = None,
    ):
        self.executor_strategy = executor_strategy or RuleOfFiveStrategy()
        self.memory_strategy = memory_strategy or FixedRatioMemoryStrategy()
        self.partition_strategy = partition_strategy or TargetSizePartitionStrategy()
        self.advisory_rules = advisory_rules or AdvisoryRules()

    def compute(self, config: ClusterConfig) -> AllocationResult:
        # 1. Reserve node resources and size executors
        layout = self.executor_strategy.size_executors(config)

        # 2. Split the per-executor memory budget
        split = self.memory_strategy.split_memory(config, layout)

        # 3. Validate the split and collect tips
        warnings, critical_warnings = self.advisory_rules.review(config, layout, split)

        # 4. Cluster totals and partitions
        plan = self.partition_strategy.recommend_partitions(
            config, layout, split.executor_memory
        )

        result = AllocationResult(
            total_executors=plan.total_executors,
            executor_cores=layout.executor_cores,
            executors_per_node=layout.executors_per_node,
            executor_memory=split.executor_memory,
            memory_overhead=split.memory_overhead,
            off_heap_memory=split.off_heap_memory,
            total_memory_per_executor=round_fixed(split.total_memory_per_executor),
            default_parallelism=plan.default_parallelism,
            shuffle_partitions=plan.shuffle_partitions,
            advisory_partition_size=plan.advisory_partition_size,
            generated_config=build_submit_flags(config, layout, split, plan),
            warnings=warnings,
            critical_warnings=critical_warnings,
        )
        logger.debug(
            "Computed %d executors x %d cores, heap %.2fg for %s",
            result.total_executors,
            result.executor_cores,
            result.executor_memory,
            config,
        )
        return result


_default_engine = AllocationEngine()


def compute_allocation(config: ClusterConfig) -> AllocationResult:
    """Compute the allocation plan for ``config`` with the default rule set."""
    return _default_engine.compute(config)
