"""Validation and optimization tips layered on top of the sized plan.

Critical warnings flag arithmetically infeasible plans; plain warnings are
tips for feasible but suboptimal ones. Neither stops flag generation.
"""
from typing import List
from typing import Tuple

from sparktune.config.constants import BUDGET_TOLERANCE_GB
from sparktune.config.constants import LARGE_HEAP_GB
from sparktune.config.constants import MIN_EFFICIENT_EXECUTOR_CORES
from sparktune.config.constants import MIN_HEAP_GB
from sparktune.config.constants import MIN_USEFUL_OFFHEAP_GB
from sparktune.config.constants import TARGET_CORES_PER_EXECUTOR
from sparktune.models.allocation import ExecutorLayout
from sparktune.models.allocation import MemorySplit
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import StorageFormat
from sparktune.utils.conversions import format_fixed
from sparktune.utils.conversions import format_number

SMALL_NODES_WARNING = (
    "Small Nodes: Cores per executor is very low (< 2). Performance will suffer."
)
LOW_HEAP_WARNING = (
    "⚠️ Critical Warning: Heap memory is dangerously low (<1.5GB). "
    "Spark Metadata may cause OOMs. Please increase Node RAM or reduce Core count."
)
LARGE_HEAP_WARNING = (
    "Large Heap (>32GB): Use G1GC (-XX:+UseG1GC) to prevent long GC pauses."
)


class AdvisoryRules:
    """Runs every check independently; several may fire for one plan."""

    def review(
        self, config: ClusterConfig, layout: ExecutorLayout, split: MemorySplit
    ) -> Tuple[List[str], List[str]]:
        warnings: List[str] = []
        critical: List[str] = []

        if (
            layout.usable_cores_per_node < TARGET_CORES_PER_EXECUTOR
            and layout.usable_cores_per_node < MIN_EFFICIENT_EXECUTOR_CORES
        ):
            warnings.append(SMALL_NODES_WARNING)

        critical.extend(self._check_budget(split))
        warnings.extend(self._tips(config, split))
        return warnings, critical

    def _check_budget(self, split: MemorySplit) -> List[str]:
        critical = []
        if split.executor_memory < MIN_HEAP_GB:
            critical.append(LOW_HEAP_WARNING)

        total_used = (
            split.executor_memory + split.memory_overhead + split.off_heap_memory
        )
        budget = split.total_memory_per_executor
        if total_used > budget + BUDGET_TOLERANCE_GB:
            critical.append(
                f"⚠️ Memory Budget Exceeded: Total memory ({format_fixed(total_used)}GB) "
                f"exceeds available RAM ({format_fixed(budget)}GB). Configuration is invalid."
            )
        return critical

    def _tips(self, config: ClusterConfig, split: MemorySplit) -> List[str]:
        tips = []
        if split.executor_memory > LARGE_HEAP_GB:
            tips.append(LARGE_HEAP_WARNING)

        if config.storage_format is not StorageFormat.STANDARD:
            tips.append(
                f"{config.storage_format.label}: Recommended to increase User Memory "
                "(reduce spark.memory.fraction) for metadata operations."
            )

        if config.enable_off_heap and split.off_heap_memory < MIN_USEFUL_OFFHEAP_GB:
            tips.append(
                f"Off-heap memory is quite small ({format_number(split.off_heap_memory)}GB). "
                "Consider increasing RAM per node or disabling off-heap if total RAM is limited."
            )
        return tips
