"""
Tests for query result classification.
"""

import asyncio

import aiohttp
import pytest
from conftest import FakePrometheusClient, vector

from board_metrics.clients.prometheus import PrometheusError, QueryResult
from board_metrics.collectors.cluster import ClusterResourceCollector
from board_metrics.query import QueryAdapter


def adapter(result) -> QueryAdapter:
    return QueryAdapter(FakePrometheusClient(result))


@pytest.mark.asyncio
async def test_single_returns_value() -> None:
    """Test a single-sample query result."""
    assert await adapter(vector(({}, 0.25))).query_single("up") == 0.25


@pytest.mark.asyncio
async def test_single_empty_vector_is_zero() -> None:
    """Test that an empty vector reads as 0."""
    assert await adapter(vector()).query_single("up") == 0.0


@pytest.mark.asyncio
async def test_single_multiple_results_first_wins(caplog) -> None:
    """Test that the first of several samples wins and all are logged."""
    queries = adapter(vector(({"instance": "b"}, 0.9), ({"instance": "a"}, 0.1)))

    with caplog.at_level("INFO", logger="board_metrics.query"):
        value = await queries.query_single("up")

    assert value == 0.9
    assert sum("multi result" in r.message for r in caplog.records) == 2


@pytest.mark.asyncio
async def test_non_vector_result_fails() -> None:
    """Test that non-vector results fail."""
    queries = adapter(QueryResult(result_type="scalar", result=[1700000000.0, "1"]))

    assert await queries.query_single("1") is None
    assert await queries.query_vector("1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        PrometheusError("bad_data: parse error"),
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ],
)
async def test_query_errors_fail_without_raising(error: Exception) -> None:
    """Test that query errors are reported as failure, not raised."""
    queries = adapter(error)

    assert await queries.query_single("up") is None
    assert await queries.query_vector("up") is None


@pytest.mark.asyncio
async def test_vector_keeps_server_order_and_labels() -> None:
    """Test that vector samples keep server order and labels."""
    queries = adapter(
        vector(
            ({"instance": "10.0.0.6:9100"}, 0.5),
            ({"instance": "10.0.0.5:9100"}, 0.42),
        )
    )

    samples = await queries.query_vector("q")

    assert [s.labels["instance"] for s in samples] == ["10.0.0.6:9100", "10.0.0.5:9100"]
    assert [s.value for s in samples] == [0.5, 0.42]


@pytest.mark.asyncio
async def test_vector_empty_is_success() -> None:
    """Test that an empty vector is a successful empty result."""
    assert await adapter(vector()).query_vector("q") == []


@pytest.mark.asyncio
async def test_warnings_do_not_fail_query() -> None:
    """Test that API warnings do not fail a query."""
    result = vector(({}, 1.0))
    result.warnings = ["PromQL info: metric might not be a counter"]

    assert await adapter(result).query_single("q") == 1.0


def test_connect_with_invalid_address_is_disconnected() -> None:
    """Test that an invalid address leaves the adapter disconnected."""
    queries = QueryAdapter.connect("not a url")

    assert not queries.connected


@pytest.mark.asyncio
async def test_disconnected_adapter_fails_queries() -> None:
    """Test that a disconnected adapter fails every query."""
    queries = QueryAdapter.connect("")

    assert await queries.query_single("up") is None
    assert await queries.query_vector("up") is None


def test_connect_with_valid_address() -> None:
    """Test connecting to a valid address."""
    queries = QueryAdapter.connect("http://prometheus:9090")

    assert queries.connected
    assert queries.address == "http://prometheus:9090"


@pytest.mark.asyncio
async def test_vector_of_wrong_element_shape_fails() -> None:
    """Test that vector elements that are not objects fail the query."""
    queries = adapter(QueryResult(result_type="vector", result=["10.0.0.5:9100", "0.4"]))

    assert await queries.query_single("up") is None
    assert await queries.query_vector("up") is None


@pytest.mark.asyncio
async def test_cluster_reports_zero_for_malformed_vector() -> None:
    """Test that a malformed vector degrades to 0 instead of faulting the tick."""
    queries = adapter(QueryResult(result_type="vector", result={"metric": {}}))
    collector = ClusterResourceCollector(lambda: queries)

    [value] = await collector.acquire()

    assert value.cpu.value == 0.0
    assert value.memory.value == 0.0
