import json
from dataclasses import asdict
from typing import Optional

from mcp.server.fastmcp import FastMCP

from sparktune.analytics.explainer import explain
from sparktune.api import calculate
from sparktune.models.cluster_config import ClusterConfig

# Initialize FastMCP server
mcp = FastMCP("sparktune")


def _build_config(
    nodes: int,
    cores_per_node: int,
    ram_per_node: float,
    workload_type: str,
    storage_format: str,
    data_volume_gb: float,
    enable_off_heap: bool,
) -> ClusterConfig:
    return ClusterConfig(
        nodes=nodes,
        cores_per_node=cores_per_node,
        ram_per_node=ram_per_node,
        workload_type=workload_type,
        storage_format=storage_format,
        data_volume_gb=data_volume_gb,
        enable_off_heap=enable_off_heap,
    )


@mcp.tool()
def calculate_spark_config(
    nodes: int = 10,
    cores_per_node: int = 16,
    ram_per_node: float = 64,
    workload_type: str = "standard",
    storage_format: str = "standard",
    data_volume_gb: float = 100,
    enable_off_heap: bool = False,
    sink_path: Optional[str] = None,
) -> str:
    """
    Size Spark executors for a cluster and generate spark-submit flags.

    Args:
        nodes: Number of worker nodes (1-100).
        cores_per_node: vCores per node (2-128, even).
        ram_per_node: RAM per node in GB (8-512, multiple of 8).
        workload_type: 'standard' (10% overhead) or 'heavy' (20% overhead, PySpark/Iceberg/Delta).
        storage_format: 'standard', 'iceberg' or 'delta'.
        data_volume_gb: Estimated data processed per job in GB.
        enable_off_heap: Carve 15% of each executor's memory out as off-heap.
        sink_path: Optional path to save the plan as a parquet dataset.
    """
    try:
        config = _build_config(
            nodes,
            cores_per_node,
            ram_per_node,
            workload_type,
            storage_format,
            data_volume_gb,
            enable_off_heap,
        )
        result = calculate(config, sink_path=sink_path)
        response = {"config": config.to_dict(), "result": result.to_dict()}
        return json.dumps(response, indent=2)
    except Exception as e:
        return f"Error calculating Spark configuration: {str(e)}"


@mcp.tool()
def explain_spark_config(
    nodes: int = 10,
    cores_per_node: int = 16,
    ram_per_node: float = 64,
    workload_type: str = "standard",
    storage_format: str = "standard",
    data_volume_gb: float = 100,
    enable_off_heap: bool = False,
) -> str:
    """
    Show the step-by-step formulas behind a Spark executor sizing plan.

    Takes the same arguments as calculate_spark_config.
    """
    try:
        config = _build_config(
            nodes,
            cores_per_node,
            ram_per_node,
            workload_type,
            storage_format,
            data_volume_gb,
            enable_off_heap,
        )
        result = calculate(config)
        steps = [asdict(step) for step in explain(config, result)]
        return json.dumps(steps, indent=2)
    except Exception as e:
        return f"Error explaining Spark configuration: {str(e)}"


def main():
    mcp.run()


if __name__ == "__main__":
    main()
