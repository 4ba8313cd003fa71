"""
Per-node utilization collector.

Collects, one sample per node-exporter instance:
- CPU utilization
- Memory utilization
- Filesystem utilization (1 - available / size over real filesystems)

Samples keep their own labels and gain nodename_for_board, the name of the
Kubernetes node whose address matches the instance.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ..clients.kubernetes import NodeLister
from ..const import NODE_RESOURCE
from ..directory import NodeDirectory, build_directory
from ..labels import add_node_names, sample_to_metric
from ..logging import get_logger
from ..models.metric import FamilyGenerator, Metric
from ..query import QueryAdapter
from .base import QueryConnector, ResourceCollector

logger = get_logger("collectors.node")

NODE_CPU_UTILIZATION_QUERY = (
    'sum by (instance) (instance:node_cpu_utilisation:rate1m{job="node-exporter"})'
)
NODE_MEMORY_UTILIZATION_QUERY = (
    'sum by (instance) (instance:node_memory_utilisation:ratio{job="node-exporter"})'
)
NODE_STORAGE_UTILIZATION_QUERY = (
    '1 -(sum by (instance) (node_filesystem_avail_bytes{job="node-exporter", fstype!="", device!=""})'
    '/sum by(instance) (node_filesystem_size_bytes{job="node-exporter", fstype!="", device!=""}))'
)

NODE_UID = "node_memory_utilization"


@dataclass
class NodeValues:
    """Per-node utilization snapshot for every reporting instance."""

    cpu: list[Metric] = field(default_factory=list)
    memory: list[Metric] = field(default_factory=list)
    storage: list[Metric] = field(default_factory=list)
    uid: str = NODE_UID


NODE_FAMILIES: list[FamilyGenerator[NodeValues]] = [
    FamilyGenerator(
        name="board_node_cpu_utilization",
        help="Node CPU Utilization",
        generate=lambda values: list(values.cpu),
    ),
    FamilyGenerator(
        name="board_node_memory_utilization",
        help="Node Memory Utilization",
        generate=lambda values: list(values.memory),
    ),
    FamilyGenerator(
        name="board_node_storage_utilization",
        help="Node Storage Utilization",
        generate=lambda values: list(values.storage),
    ),
]


class NodeResourceCollector(ResourceCollector[NodeValues]):
    """Collector for per-node CPU, memory and storage utilization."""

    NAME = NODE_RESOURCE
    FAMILIES = NODE_FAMILIES

    def __init__(self, connect_queries: QueryConnector, connect_nodes: Callable[[], NodeLister]):
        """
        Args:
            connect_queries: Factory returning a query adapter
            connect_nodes: Factory returning a node lister
        """
        super().__init__(connect_queries)
        self.connect_nodes = connect_nodes

    async def _metrics(
        self,
        queries: QueryAdapter,
        query: str,
        directory: NodeDirectory,
    ) -> list[Metric]:
        samples = await queries.query_vector(query)
        if samples is None:
            return []

        metrics = [sample_to_metric(s.labels, s.value) for s in samples]
        return add_node_names(metrics, directory)

    async def acquire(self) -> list[NodeValues]:
        """Build the node directory, then run the three node queries."""
        queries = self.connect_queries()
        if not queries.connected:
            return []

        directory = await build_directory(self.connect_nodes)
        if directory is None:
            return []

        values = NodeValues(
            cpu=await self._metrics(queries, NODE_CPU_UTILIZATION_QUERY, directory),
            memory=await self._metrics(queries, NODE_MEMORY_UTILIZATION_QUERY, directory),
            storage=await self._metrics(queries, NODE_STORAGE_UTILIZATION_QUERY, directory),
        )
        logger.debug(
            f"Node utilization: {len(values.cpu)} cpu, {len(values.memory)} memory, "
            f"{len(values.storage)} storage samples"
        )
        return [values]
