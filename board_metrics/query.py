"""
Query adapter: runs a PromQL query and classifies the result.

Failures are logged with the query text and reported as None, never
raised; collectors substitute their own neutral default.
"""

import asyncio
from datetime import datetime

import aiohttp

from .clients.prometheus import PrometheusClient, PrometheusError, VectorSample, parse_vector
from .const import DEFAULT_QUERY_TIMEOUT
from .logging import get_logger

logger = get_logger("query")

VECTOR = "vector"


class QueryAdapter:
    """Evaluates single-value and vector queries against one server."""

    def __init__(self, client: PrometheusClient | None, address: str = ""):
        self._client = client
        self.address = client.address if client else address

    @classmethod
    def connect(cls, address: str, timeout: float = DEFAULT_QUERY_TIMEOUT) -> "QueryAdapter":
        """
        Create an adapter for the server at address.

        A client that cannot be constructed leaves the adapter disconnected;
        every query on it then fails.
        """
        try:
            client = PrometheusClient(address, timeout=timeout)
        except PrometheusError as e:
            logger.warning(f"New prometheus client error: {e}")
            client = None
        return cls(client, address)

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def _vector(self, query: str) -> list[VectorSample] | None:
        if self._client is None:
            logger.warning(f"Query prometheus metric {query} skipped: no client for {self.address!r}")
            return None

        try:
            result = await self._client.query(query, datetime.now())
        except (PrometheusError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Query prometheus metric {query} error: {e!r}")
            return None

        if result.warnings:
            logger.info(f"Query prometheus metric {query} warns: {' '.join(result.warnings)}")

        if result.result_type != VECTOR:
            logger.warning(
                f"Query prometheus metric {query} type {result.result_type} is not vector"
            )
            return None

        try:
            return parse_vector(result.result or [])
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Query prometheus metric {query} returned a malformed vector: {e!r}")
            return None

    async def query_single(self, query: str) -> float | None:
        """
        Evaluate a query expected to yield one sample.

        Returns:
            The sample value, 0.0 for an empty vector, or None on failure.
            With several samples every one is logged and the first in the
            order the server returned them wins.
        """
        samples = await self._vector(query)
        if samples is None:
            return None

        if not samples:
            logger.info(f"Query prometheus metric {query} has no result.")
            return 0.0

        if len(samples) > 1:
            for sample in samples:
                logger.info(f"Query prometheus metric {query} result multi result: {sample}")

        return samples[0].value

    async def query_vector(self, query: str) -> list[VectorSample] | None:
        """
        Evaluate a query yielding any number of labeled samples.

        Returns:
            Samples in server order ([] when empty), or None on failure
        """
        return await self._vector(query)
