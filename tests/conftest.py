"""
Pytest configuration and fixtures.
"""

from pathlib import Path

import pytest

from board_metrics.clients.kubernetes import NodeInfo, NodeListingError
from board_metrics.clients.prometheus import PrometheusError, QueryResult, VectorSample


class FakeQueries:
    """Query adapter answering from canned results; None means failure."""

    def __init__(
        self,
        single: dict[str, float | None] | None = None,
        vectors: dict[str, list[VectorSample] | None] | None = None,
        connected: bool = True,
    ):
        self.single = single or {}
        self.vectors = vectors or {}
        self.connected = connected
        self.calls: list[str] = []

    async def query_single(self, query: str) -> float | None:
        self.calls.append(query)
        return self.single.get(query)

    async def query_vector(self, query: str) -> list[VectorSample] | None:
        self.calls.append(query)
        return self.vectors.get(query)


class FakeNodeLister:
    """Node lister returning fixed nodes, or failing."""

    def __init__(self, nodes: list[NodeInfo] | None = None, fail: bool = False):
        self.nodes = nodes or []
        self.fail = fail

    async def list_nodes(self) -> list[NodeInfo]:
        if self.fail:
            raise NodeListingError("List nodes failed: 503 Service Unavailable")
        return self.nodes


class FakePrometheusClient:
    """Stands in for PrometheusClient inside a QueryAdapter."""

    address = "http://prometheus.test:9090"

    def __init__(self, result: QueryResult | Exception):
        self.result = result
        self.queries: list[str] = []

    async def query(self, query, time=None) -> QueryResult:
        self.queries.append(query)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def vector(*items: tuple[dict[str, str], float]) -> QueryResult:
    """Build a successful vector QueryResult in raw API shape."""
    return QueryResult(
        result_type="vector",
        result=[{"metric": labels, "value": [1700000000.0, str(value)]} for labels, value in items],
    )


@pytest.fixture
def example_config_path() -> Path:
    """Path to the example config file shipped with the project."""
    return Path(__file__).parent.parent / "config.example.conf"


@pytest.fixture
def nodes() -> list[NodeInfo]:
    return [
        NodeInfo(name="node-a", addresses=["10.0.0.5", "node-a.internal"]),
        NodeInfo(name="node-b", addresses=["10.0.0.6"]),
    ]


@pytest.fixture
def prometheus_error() -> PrometheusError:
    return PrometheusError("bad_data: parse error at char 4")
