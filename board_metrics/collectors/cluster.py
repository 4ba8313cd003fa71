"""
Cluster-wide utilization collector.

Collects:
- CPU utilization (1 - idle fraction over 5 minutes)
- Memory utilization (1 - available / allocatable)

Both families always carry exactly one unlabeled sample; a failed query
reports 0.
"""

from dataclasses import dataclass, field

from ..const import CLUSTER_RESOURCE
from ..logging import get_logger
from ..models.metric import FamilyGenerator, Metric
from .base import ResourceCollector

logger = get_logger("collectors.cluster")

CLUSTER_CPU_UTILIZATION_QUERY = '1-avg(rate(node_cpu_seconds_total{mode="idle"}[5m]))'
CLUSTER_MEMORY_UTILIZATION_QUERY = (
    "1 - sum(:node_memory_MemAvailable_bytes:sum{}) "
    "/ sum(kube_node_status_allocatable_memory_bytes{})"
)

CLUSTER_UID = "cluster_utilization"


@dataclass
class ClusterValue:
    """Cluster utilization snapshot."""

    cpu: Metric = field(default_factory=Metric)
    memory: Metric = field(default_factory=Metric)
    uid: str = CLUSTER_UID


CLUSTER_FAMILIES: list[FamilyGenerator[ClusterValue]] = [
    FamilyGenerator(
        name="board_cluster_cpu_utilization",
        help="Cluster CPU Utilization",
        generate=lambda value: [value.cpu],
    ),
    FamilyGenerator(
        name="board_cluster_memory_utilization",
        help="Cluster Memory Utilization",
        generate=lambda value: [value.memory],
    ),
]


class ClusterResourceCollector(ResourceCollector[ClusterValue]):
    """Collector for cluster-wide CPU and memory utilization."""

    NAME = CLUSTER_RESOURCE
    FAMILIES = CLUSTER_FAMILIES

    async def acquire(self) -> list[ClusterValue]:
        """Run both cluster queries."""
        queries = self.connect_queries()
        if not queries.connected:
            return []

        cpu = await queries.query_single(CLUSTER_CPU_UTILIZATION_QUERY)
        if cpu is None:
            cpu = 0.0

        memory = await queries.query_single(CLUSTER_MEMORY_UTILIZATION_QUERY)
        if memory is None:
            memory = 0.0

        logger.debug(f"Cluster utilization: cpu={cpu} memory={memory}")
        return [ClusterValue(cpu=Metric(value=cpu), memory=Metric(value=memory))]
