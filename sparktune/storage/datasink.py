from abc import ABC
from abc import abstractmethod

from sparktune.models.allocation import AllocationResult
from sparktune.models.cluster_config import ClusterConfig


class IDataSink(ABC):
    """
    Interface for data sinks that store calculated allocation plans.
    """

    @abstractmethod
    def save(self, config: ClusterConfig, result: AllocationResult) -> None:
        """Save the plan together with the configuration it was computed from."""
        pass
