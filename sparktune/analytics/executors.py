from sparktune.config.constants import RESERVED_CORES
from sparktune.config.constants import RESERVED_RAM_GB
from sparktune.config.constants import TARGET_CORES_PER_EXECUTOR
from sparktune.models.allocation import ExecutorLayout
from sparktune.models.cluster_config import ClusterConfig

from .base import BaseExecutorStrategy


class RuleOfFiveStrategy(BaseExecutorStrategy):
    """
    Sizes executors at 5 cores each after reserving one core and one GB per
    node for the OS and node manager.

    Remainder cores that do not fill a whole executor are left idle. Nodes with
    fewer than 5 usable cores run a single executor holding all of them.
    """

    def __init__(self, target_cores: int = TARGET_CORES_PER_EXECUTOR):
        self.target_cores = target_cores

    def size_executors(self, config: ClusterConfig) -> ExecutorLayout:
        usable_cores = max(0, config.cores_per_node - RESERVED_CORES)
        usable_ram = max(0, config.ram_per_node - RESERVED_RAM_GB)

        if usable_cores < self.target_cores:
            executor_cores = usable_cores
            executors_per_node = 1
        else:
            executor_cores = self.target_cores
            executors_per_node = usable_cores // self.target_cores

        return ExecutorLayout(
            usable_cores_per_node=usable_cores,
            usable_ram_per_node=usable_ram,
            executor_cores=executor_cores,
            executors_per_node=executors_per_node,
        )
