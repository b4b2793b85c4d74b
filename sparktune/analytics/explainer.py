"""Human readable walk-through of an allocation.

Each step shows the general formula and the same formula with the current
numbers substituted, so a plan can be audited by hand.
"""
from typing import Dict
from typing import List

from sparktune.config.constants import MIN_OVERHEAD_MB
from sparktune.config.constants import OFFHEAP_FACTOR
from sparktune.config.constants import RESERVED_CORES
from sparktune.config.constants import RESERVED_RAM_GB
from sparktune.config.constants import TARGET_CORES_PER_EXECUTOR
from sparktune.config.constants import TARGET_PARTITION_MB
from sparktune.models.allocation import AllocationResult
from sparktune.models.allocation import FormulaStep
from sparktune.models.allocation import MemoryShares
from sparktune.models.cluster_config import ClusterConfig
from sparktune.utils.conversions import MB_PER_GB
from sparktune.utils.conversions import format_fixed
from sparktune.utils.conversions import format_number

from .memory import overhead_factor


def explain(config: ClusterConfig, result: AllocationResult) -> List[FormulaStep]:
    factor = format_number(overhead_factor(config.workload_type))
    total = format_fixed(result.total_memory_per_executor)
    overhead = format_fixed(result.memory_overhead)
    off_heap = format_fixed(result.off_heap_memory)
    heap = format_fixed(result.executor_memory)

    steps = [
        FormulaStep(
            label="Executors Per Node",
            formula=f"floor((CoresPerNode - {RESERVED_CORES}) / {TARGET_CORES_PER_EXECUTOR})",
            value=(
                f"floor(({format_number(config.cores_per_node)} - {RESERVED_CORES}) / "
                f"{TARGET_CORES_PER_EXECUTOR}) = {result.executors_per_node}"
            ),
        ),
        FormulaStep(
            label="Total RAM / Executor",
            formula=f"(RAMPerNode - {RESERVED_RAM_GB}) / ExecutorsPerNode",
            value=(
                f"({format_number(config.ram_per_node)} - {RESERVED_RAM_GB}) / "
                f"{result.executors_per_node} = {total} GB"
            ),
        ),
        FormulaStep(
            label="Memory Overhead",
            formula=f"max({MIN_OVERHEAD_MB}MB, TotalRAM * {factor})",
            value=(
                f"max({format_fixed(MIN_OVERHEAD_MB / MB_PER_GB)}, {total} * {factor})"
                f" = {overhead} GB"
            ),
        ),
    ]

    if result.off_heap_memory > 0:
        steps.append(
            FormulaStep(
                label="Off-Heap Memory",
                formula=f"TotalRAM * {OFFHEAP_FACTOR}",
                value=f"{total} * {OFFHEAP_FACTOR} = {off_heap} GB",
            )
        )
        steps.append(
            FormulaStep(
                label="Executor Heap",
                formula="TotalRAM - Overhead - OffHeap",
                value=f"{total} - {overhead} - {off_heap} = {heap} GB",
            )
        )
    else:
        steps.append(
            FormulaStep(
                label="Executor Heap",
                formula="TotalRAM - Overhead",
                value=f"{total} - {overhead} = {heap} GB",
            )
        )

    if config.data_volume_gb > 0:
        steps.append(
            FormulaStep(
                label="Shuffle Partitions",
                formula=f"ceil(DataVolumeGB * {MB_PER_GB} / {TARGET_PARTITION_MB})",
                value=(
                    f"ceil({format_fixed(config.data_volume_gb)} * {MB_PER_GB} / "
                    f"{TARGET_PARTITION_MB}) = {result.shuffle_partitions}"
                ),
            )
        )
    return steps


def memory_shares(result: AllocationResult) -> MemoryShares:
    """Container split in percent; heap takes whatever overhead and off-heap leave."""
    total = result.total_memory_per_executor
    if total <= 0:
        return MemoryShares(overhead_pct=0.0, off_heap_pct=0.0, heap_pct=0.0)
    overhead_pct = (result.memory_overhead / total) * 100
    off_heap_pct = (result.off_heap_memory / total) * 100
    heap_pct = max(0.0, 100 - overhead_pct - off_heap_pct)
    return MemoryShares(
        overhead_pct=overhead_pct, off_heap_pct=off_heap_pct, heap_pct=heap_pct
    )


PLAIN_LANGUAGE: Dict[str, str] = {
    "Total Executors": (
        "The total number of worker processes across your whole cluster. "
        "More isn't always better!"
    ),
    "Executor Cores": (
        "Number of tasks that can run in parallel inside one executor. "
        "5 is the magic number for throughput."
    ),
    "Executor Memory": (
        "The main RAM for your data and computations. "
        "Overhead is separate memory for the system to breathe."
    ),
    "Shuffle Partitions": (
        "How many pieces to split your data into during wide transformations "
        "(like joins/groups)."
    ),
    "Default Parallelism": (
        "The default number of tasks for RDD operations. Keeps CPU cores busy."
    ),
}

MEMORY_PLAIN_LANGUAGE = (
    "Overhead is the 'Tax' paid to the OS. Heap is where your data lives."
)


def describe(config: ClusterConfig) -> Dict[str, str]:
    """Plain-language notes for the summary metrics shown for ``config``.

    Shuffle partitions are only shown, and so only described, when a data
    volume is set.
    """
    return {
        title: text
        for title, text in PLAIN_LANGUAGE.items()
        if title != "Shuffle Partitions" or config.data_volume_gb > 0
    }
