"""
Prometheus HTTP API client for instant queries.

Talks to GET {address}/api/v1/query with aiohttp and returns the decoded
result without interpreting it; result classification is left to callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import aiohttp
from yarl import URL

from ..const import DEFAULT_QUERY_TIMEOUT, USER_AGENT


class PrometheusError(Exception):
    """Client construction or query failure."""


@dataclass
class QueryResult:
    """Decoded 'data' section of a query response."""

    result_type: str
    result: Any
    warnings: list[str] = field(default_factory=list)


@dataclass
class VectorSample:
    """One element of an instant vector."""

    labels: dict[str, str]
    value: float


def parse_vector(result: list[dict[str, Any]]) -> list[VectorSample]:
    """
    Convert raw vector elements into samples, preserving API order.

    Each element looks like {"metric": {...}, "value": [<ts>, "<value>"]}.
    """
    return [
        VectorSample(
            labels={str(k): str(v) for k, v in item.get("metric", {}).items()},
            value=float(item["value"][1]),
        )
        for item in result
    ]


class PrometheusClient:
    """Client for the instant query endpoint of a Prometheus server."""

    def __init__(
        self,
        address: str,
        timeout: float = DEFAULT_QUERY_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize Prometheus client.

        Args:
            address: Base URL of the server (http://prometheus:9090)
            timeout: Query timeout in seconds
            session: Optional shared session; a short-lived one is opened
                per query otherwise

        Raises:
            PrometheusError: If the address is not an absolute http(s) URL
        """
        try:
            url = URL(address)
        except (TypeError, ValueError) as e:
            raise PrometheusError(f"Invalid Prometheus address {address!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise PrometheusError(f"Invalid Prometheus address {address!r}")

        self.address = address
        self.timeout = timeout
        self._query_url = url / "api/v1/query"
        self._session = session

    async def query(self, query: str, time: datetime | None = None) -> QueryResult:
        """
        Execute an instant query.

        Args:
            query: PromQL query string
            time: Evaluation timestamp (default: server time)

        Returns:
            Decoded query result

        Raises:
            PrometheusError: If the server reports an error or the response
                cannot be decoded
            aiohttp.ClientError: On transport failures
            asyncio.TimeoutError: If the query exceeds the timeout
        """
        params = {"query": query}
        if time is not None:
            params["time"] = f"{time.timestamp():.3f}"

        if self._session is not None:
            return await self._query(self._session, params)

        async with aiohttp.ClientSession(headers={"User-Agent": USER_AGENT}) as session:
            return await self._query(session, params)

    async def _query(self, session: aiohttp.ClientSession, params: dict[str, str]) -> QueryResult:
        async with session.get(
            self._query_url,
            params=params,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as response:
            try:
                body = await response.json(content_type=None)
            except ValueError as e:
                raise PrometheusError(
                    f"Unexpected response (HTTP {response.status}) from {self.address}"
                ) from e

        if not isinstance(body, dict):
            raise PrometheusError(f"Unexpected response body from {self.address}")

        if body.get("status") != "success":
            error_type = body.get("errorType", "unknown")
            raise PrometheusError(f"{error_type}: {body.get('error', 'query failed')}")

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise PrometheusError(f"Unexpected data section from {self.address}")

        return QueryResult(
            result_type=str(data.get("resultType", "")),
            result=data.get("result"),
            warnings=[str(w) for w in body.get("warnings") or []],
        )
