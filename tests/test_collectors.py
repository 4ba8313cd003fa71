"""
Tests for the cluster and node resource collectors.
"""

import pytest
from conftest import FakeNodeLister, FakeQueries

from board_metrics.clients.prometheus import VectorSample
from board_metrics.collectors.cluster import (
    CLUSTER_CPU_UTILIZATION_QUERY,
    CLUSTER_MEMORY_UTILIZATION_QUERY,
    CLUSTER_UID,
    ClusterResourceCollector,
)
from board_metrics.collectors.node import (
    NODE_CPU_UTILIZATION_QUERY,
    NODE_MEMORY_UTILIZATION_QUERY,
    NODE_STORAGE_UTILIZATION_QUERY,
    NODE_UID,
    NodeResourceCollector,
)


class TestClusterResourceCollector:
    """Tests for ClusterResourceCollector."""

    @pytest.mark.asyncio
    async def test_values_from_queries(self) -> None:
        """Test that both cluster queries feed the cluster value."""
        queries = FakeQueries(
            single={
                CLUSTER_CPU_UTILIZATION_QUERY: 0.37,
                CLUSTER_MEMORY_UTILIZATION_QUERY: 0.61,
            }
        )
        collector = ClusterResourceCollector(lambda: queries)

        [value] = await collector.acquire()

        assert value.uid == CLUSTER_UID
        assert value.cpu.value == 0.37
        assert value.memory.value == 0.61
        assert value.cpu.labels == {}
        assert queries.calls == [CLUSTER_CPU_UTILIZATION_QUERY, CLUSTER_MEMORY_UTILIZATION_QUERY]

    @pytest.mark.asyncio
    async def test_failed_queries_report_zero(self) -> None:
        """Test that failed cluster queries report 0."""
        collector = ClusterResourceCollector(lambda: FakeQueries())

        [value] = await collector.acquire()

        assert value.cpu.value == 0.0
        assert value.memory.value == 0.0
        assert value.cpu.label_keys == []

    @pytest.mark.asyncio
    async def test_one_failed_query_does_not_affect_other(self) -> None:
        """Test that one failed cluster query leaves the other value intact."""
        queries = FakeQueries(single={CLUSTER_MEMORY_UTILIZATION_QUERY: 0.5})
        collector = ClusterResourceCollector(lambda: queries)

        [value] = await collector.acquire()

        assert value.cpu.value == 0.0
        assert value.memory.value == 0.5

    @pytest.mark.asyncio
    async def test_disconnected_returns_nothing(self) -> None:
        """Test that a disconnected adapter yields no objects."""
        collector = ClusterResourceCollector(lambda: FakeQueries(connected=False))

        assert await collector.acquire() == []

    def test_declared_families(self) -> None:
        """Test the declared cluster families and collector name."""
        collector = ClusterResourceCollector(FakeQueries)

        assert [f.name for f in collector.FAMILIES] == [
            "board_cluster_cpu_utilization",
            "board_cluster_memory_utilization",
        ]
        assert collector.NAME == "clusterresource"


class TestNodeResourceCollector:
    """Tests for NodeResourceCollector."""

    @staticmethod
    def samples(*items: tuple[str, float]) -> list[VectorSample]:
        return [
            VectorSample(labels={"instance": instance, "job": "node-exporter"}, value=value)
            for instance, value in items
        ]

    @pytest.mark.asyncio
    async def test_samples_gain_node_names(self, nodes) -> None:
        """Test that node samples gain the node name label."""
        queries = FakeQueries(
            vectors={
                NODE_CPU_UTILIZATION_QUERY: self.samples(("10.0.0.5:9100", 0.42)),
                NODE_MEMORY_UTILIZATION_QUERY: self.samples(
                    ("10.0.0.5:9100", 0.3), ("10.0.0.9:9100", 0.8)
                ),
                NODE_STORAGE_UTILIZATION_QUERY: [],
            }
        )
        collector = NodeResourceCollector(lambda: queries, lambda: FakeNodeLister(nodes))

        [values] = await collector.acquire()

        assert values.uid == NODE_UID
        [cpu] = values.cpu
        assert cpu.value == 0.42
        assert cpu.label_keys == ["instance", "job", "nodename_for_board"]
        assert cpu.labels["nodename_for_board"] == "node-a"
        assert [m.labels["nodename_for_board"] for m in values.memory] == [
            "node-a",
            "10.0.0.9:9100",
        ]
        assert values.storage == []

    @pytest.mark.asyncio
    async def test_sample_without_instance_is_untouched(self, nodes) -> None:
        """Test that samples without an instance label keep their labels."""
        queries = FakeQueries(
            vectors={NODE_CPU_UTILIZATION_QUERY: [VectorSample(labels={"job": "x"}, value=1.0)]}
        )
        collector = NodeResourceCollector(lambda: queries, lambda: FakeNodeLister(nodes))

        [values] = await collector.acquire()

        assert values.cpu[0].labels == {"job": "x"}

    @pytest.mark.asyncio
    async def test_failed_query_is_empty_family(self, nodes) -> None:
        """Test that a failed node query empties only its family."""
        queries = FakeQueries(
            vectors={
                NODE_CPU_UTILIZATION_QUERY: None,
                NODE_MEMORY_UTILIZATION_QUERY: self.samples(("10.0.0.6:9100", 0.2)),
                NODE_STORAGE_UTILIZATION_QUERY: None,
            }
        )
        collector = NodeResourceCollector(lambda: queries, lambda: FakeNodeLister(nodes))

        [values] = await collector.acquire()

        assert values.cpu == []
        assert values.memory[0].labels["nodename_for_board"] == "node-b"
        assert values.storage == []

    @pytest.mark.asyncio
    async def test_listing_failure_returns_nothing(self) -> None:
        """Test that a node listing failure skips all node queries."""
        queries = FakeQueries()
        collector = NodeResourceCollector(lambda: queries, lambda: FakeNodeLister(fail=True))

        assert await collector.acquire() == []
        assert queries.calls == []

    @pytest.mark.asyncio
    async def test_disconnected_returns_nothing(self, nodes) -> None:
        """Test that a disconnected adapter yields no objects."""
        collector = NodeResourceCollector(
            lambda: FakeQueries(connected=False), lambda: FakeNodeLister(nodes)
        )

        assert await collector.acquire() == []
