"""Arrow/Parquet storage layer for calculated allocation plans.

Each saved calculation becomes one row holding the input configuration and the
resulting plan, partitioned by calculation date.
"""
import logging
from datetime import date
from typing import Optional

import pyarrow as pa
import pyarrow.parquet as pq
import s3fs

from sparktune.models.allocation import AllocationResult
from sparktune.models.cluster_config import ClusterConfig

from .datasink import IDataSink

logger = logging.getLogger(__name__)

PLAN_SCHEMA = pa.schema(
    [
        # Input configuration
        pa.field("nodes", pa.int32()),
        pa.field("cores_per_node", pa.int32()),
        pa.field("ram_per_node", pa.float64()),
        pa.field("workload_type", pa.string()),
        pa.field("storage_format", pa.string()),
        pa.field("data_volume_gb", pa.float64()),
        pa.field("enable_off_heap", pa.bool_()),
        # Allocation plan
        pa.field("total_executors", pa.int32()),
        pa.field("executor_cores", pa.int32()),
        pa.field("executors_per_node", pa.int32()),
        pa.field("executor_memory", pa.float64()),
        pa.field("memory_overhead", pa.float64()),
        pa.field("off_heap_memory", pa.float64()),
        pa.field("total_memory_per_executor", pa.float64()),
        pa.field("default_parallelism", pa.int64()),
        pa.field("shuffle_partitions", pa.int64()),
        pa.field("advisory_partition_size", pa.string()),
        pa.field("generated_config", pa.string()),
        pa.field("warnings", pa.list_(pa.string())),
        pa.field("critical_warnings", pa.list_(pa.string())),
        pa.field("calculated_dt", pa.date32()),
    ]
)


class ParquetSink(IDataSink):
    """
    A data sink that writes allocation plans to a Parquet dataset.
    """

    def __init__(self, sink_location: str, filesystem: Optional[object] = None):
        """
        Initializes the sink with a target location.
        :param sink_location: The root path for the Parquet dataset (e.g., 's3://my-bucket/my-path/').
        :param filesystem: Optional filesystem override; defaults to S3 for s3:// paths.
        """
        self.sink_location = sink_location.rstrip("/")
        if filesystem is None and self.sink_location.startswith("s3://"):
            filesystem = s3fs.S3FileSystem()
        self.filesystem = filesystem

    def to_table(
        self,
        config: ClusterConfig,
        result: AllocationResult,
        calculated_dt: Optional[date] = None,
    ) -> pa.Table:
        table_data = {
            key: [value]
            for key, value in {**config.to_dict(), **result.to_dict()}.items()
        }
        table_data["calculated_dt"] = [calculated_dt or date.today()]
        return pa.Table.from_pydict(table_data, schema=PLAN_SCHEMA)

    def save(self, config: ClusterConfig, result: AllocationResult) -> None:
        """
        Saves the plan to a Parquet dataset partitioned by 'calculated_dt'.
        """
        if not isinstance(config, ClusterConfig):
            raise TypeError("config must be a ClusterConfig object")
        if not isinstance(result, AllocationResult):
            raise TypeError("result must be an AllocationResult object")

        table = self.to_table(config, result)
        logger.info("Writing allocation plan to %s", self.sink_location)
        pq.write_to_dataset(
            table,
            root_path=self.sink_location,
            filesystem=self.filesystem,
            partition_cols=["calculated_dt"],
            existing_data_behavior="overwrite_or_ignore",
        )
