"""spark-submit flag generation.

The output is meant to be pasted into a submit command, so its shape is fixed:
one flag per line joined with a trailing `` \\`` continuation, the heap in whole
GB (floored) and overhead/off-heap in MB (rounded up).
"""
import math
from typing import List

from sparktune.config.constants import LARGE_HEAP_GB
from sparktune.config.constants import REDUCED_MEMORY_FRACTION
from sparktune.models.allocation import ExecutorLayout
from sparktune.models.allocation import MemorySplit
from sparktune.models.allocation import PartitionPlan
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import StorageFormat
from sparktune.utils.conversions import gb_to_mb_ceil

LINE_CONTINUATION = " \\\n"
KRYO_SERIALIZER = "org.apache.spark.serializer.KryoSerializer"


def submit_flag_lines(
    config: ClusterConfig,
    layout: ExecutorLayout,
    split: MemorySplit,
    plan: PartitionPlan,
) -> List[str]:
    lines = [
        f"--num-executors {plan.total_executors}",
        f"--executor-cores {layout.executor_cores}",
        f"--executor-memory {math.floor(split.executor_memory)}g",
        f"--conf spark.executor.memoryOverhead={gb_to_mb_ceil(split.memory_overhead)}m",
        f"--conf spark.sql.shuffle.partitions={plan.shuffle_partitions}",
        f"--conf spark.default.parallelism={plan.default_parallelism}",
        "--conf spark.sql.adaptive.enabled=true",
        f"--conf spark.serializer={KRYO_SERIALIZER}",
    ]

    if config.enable_off_heap and split.off_heap_memory > 0:
        lines.append("--conf spark.memory.offHeap.enabled=true")
        lines.append(
            f"--conf spark.memory.offHeap.size={gb_to_mb_ceil(split.off_heap_memory)}m"
        )

    if config.storage_format is not StorageFormat.STANDARD:
        lines.append(
            f"--conf spark.memory.fraction={REDUCED_MEMORY_FRACTION} "
            f"# More user memory for {config.storage_format.value} metadata"
        )

    if split.executor_memory > LARGE_HEAP_GB:
        lines.append('--conf "spark.executor.extraJavaOptions=-XX:+UseG1GC"')

    return lines


def build_submit_flags(
    config: ClusterConfig,
    layout: ExecutorLayout,
    split: MemorySplit,
    plan: PartitionPlan,
) -> str:
    return LINE_CONTINUATION.join(submit_flag_lines(config, layout, split, plan))
