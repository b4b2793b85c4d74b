from typing import Any
from typing import Optional

from sparktune.config.settings import ensure_within_bounds
from sparktune.engine import compute_allocation
from sparktune.models.allocation import AllocationResult
from sparktune.models.cluster_config import ClusterConfig
from sparktune.storage.arrow_io import ParquetSink


def calculate(
    config: Optional[ClusterConfig] = None,
    sink_path: Optional[str] = None,
    **overrides: Any,
) -> AllocationResult:
    """
    A high-level function to size a Spark job for a cluster.

    This function simplifies programmatic access by handling configuration
    assembly, range checks and optional persistence.

    :param config: Base configuration. Defaults to ``ClusterConfig()``.
    :param sink_path: Optional path to save the plan as a parquet dataset.
    :param overrides: Field overrides, snake_case or camelCase
                      (e.g. ``nodes=20`` or ``coresPerNode=32``).
    :return: The AllocationResult for the final configuration.
    :raises ValueError: If a value is outside the supported input ranges.
    """
    base = config or ClusterConfig()
    # camelCase overrides are normalized after the merge, so they win over base fields
    final_config = ClusterConfig(**{**base.to_dict(), **overrides})
    ensure_within_bounds(final_config)

    result = compute_allocation(final_config)

    if sink_path:
        sink = ParquetSink(sink_path)
        sink.save(final_config, result)

    return result
