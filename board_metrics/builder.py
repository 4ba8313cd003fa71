"""
Builder assembling collector units.

Usage:
    units = (
        Builder()
        .with_prometheus("http://prometheus:9090")
        .with_allow_deny_filter(AllowDenyList())
        .build()
    )
    for unit in units:
        registry.register(unit)
        unit.start(shutdown)
"""

import asyncio
from collections.abc import Callable, Iterable, Iterator

from prometheus_client.metrics_core import Metric as ExposedMetric
from prometheus_client.registry import Collector

from .clients.kubernetes import NodeLister
from .collectors.base import ResourceCollector
from .collectors.cluster import ClusterResourceCollector
from .collectors.node import NodeResourceCollector
from .config.loader import ConfigError
from .const import (
    CLUSTER_RESOURCE,
    DEFAULT_PROMETHEUS_URL,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_REFRESH_INTERVAL,
    NODE_RESOURCE,
)
from .filter import AllowDenyList
from .logging import get_logger
from .models.metric import filter_families
from .query import QueryAdapter
from .refresh import RefreshLoop
from .store import MetricsStore
from .telemetry import RefreshTelemetry

logger = get_logger("builder")


class CollectorUnit(Collector):
    """
    A store and the refresh loop that feeds it.

    Registrable with a prometheus_client registry; a scrape renders every
    enabled family for every stored identity.
    """

    def __init__(self, name: str, store: MetricsStore, loop: RefreshLoop):
        self.name = name
        self.store = store
        self.loop = loop
        self._task: asyncio.Task | None = None

    def collect(self) -> Iterator[ExposedMetric]:
        return self.store.collect()

    def describe(self) -> Iterator[ExposedMetric]:
        return self.store.describe()

    def start(self, shutdown: asyncio.Event) -> asyncio.Task:
        """Spawn the refresh loop on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.loop.run(shutdown), name=f"refresh-{self.name}")
        return self._task

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    def __repr__(self) -> str:
        families = ", ".join(f.name for f in self.store.families)
        return f"CollectorUnit({self.name!r}, [{families}])"


class Builder:
    """Collects settings, then builds one collector unit per collector kind."""

    def __init__(self):
        self.apiserver = ""
        self.kubeconfig = ""
        self.namespaces: list[str] = []
        self.prometheus = DEFAULT_PROMETHEUS_URL
        self.query_timeout = DEFAULT_QUERY_TIMEOUT
        self.refresh_interval = DEFAULT_REFRESH_INTERVAL
        self.enabled_collectors: list[str] = []
        self.build_all = False
        self.allow_deny_filter: AllowDenyList | None = None
        self.telemetry: RefreshTelemetry | None = None

    def with_apiserver(self, apiserver: str) -> "Builder":
        self.apiserver = apiserver
        return self

    def with_kubeconfig(self, kubeconfig: str) -> "Builder":
        self.kubeconfig = kubeconfig
        return self

    def with_namespaces(self, namespaces: Iterable[str]) -> "Builder":
        self.namespaces = list(namespaces)
        return self

    def with_prometheus(self, prometheus: str) -> "Builder":
        self.prometheus = prometheus
        return self

    def with_query_timeout(self, timeout: float) -> "Builder":
        self.query_timeout = timeout
        return self

    def with_refresh_interval(self, interval: float) -> "Builder":
        self.refresh_interval = interval
        return self

    def with_enabled_collectors(self, names: Iterable[str]) -> "Builder":
        self.enabled_collectors = sorted(names)
        return self

    def with_build_all(self, build_all: bool = True) -> "Builder":
        """Build every collector kind regardless of the enabled selection."""
        self.build_all = build_all
        return self

    def with_allow_deny_filter(self, allow_deny: AllowDenyList) -> "Builder":
        self.allow_deny_filter = allow_deny
        return self

    def with_telemetry(self, telemetry: RefreshTelemetry) -> "Builder":
        self.telemetry = telemetry
        return self

    def connect_queries(self) -> QueryAdapter:
        return QueryAdapter.connect(self.prometheus, self.query_timeout)

    def connect_nodes(self) -> NodeLister:
        return NodeLister(self.apiserver, self.kubeconfig)

    def _selected(self) -> list[str]:
        if self.build_all or not self.enabled_collectors:
            return sorted(AVAILABLE_COLLECTORS)

        unknown = [n for n in self.enabled_collectors if n not in AVAILABLE_COLLECTORS]
        if unknown:
            raise ConfigError(
                f"Unknown collectors: {', '.join(unknown)} "
                f"(available: {', '.join(sorted(AVAILABLE_COLLECTORS))})"
            )
        return list(self.enabled_collectors)

    def _unit(self, collector: ResourceCollector) -> CollectorUnit:
        families = filter_families(collector.FAMILIES, self.allow_deny_filter.is_included)
        store = MetricsStore(families)
        loop = RefreshLoop(collector, store, self.refresh_interval, self.telemetry)
        return CollectorUnit(collector.NAME, store, loop)

    def build(self) -> list[CollectorUnit]:
        """
        Build collector units for the selected collector kinds.

        Nothing is started; call CollectorUnit.start for each unit.

        Raises:
            ConfigError: If no allow/deny filter was set or an unknown
                collector is selected
        """
        if self.allow_deny_filter is None:
            raise ConfigError("An allow/deny filter is required to build collectors")

        units = [self._unit(AVAILABLE_COLLECTORS[name](self)) for name in self._selected()]

        logger.info(f"Active collectors: {', '.join(unit.name for unit in units)}")
        return units


AVAILABLE_COLLECTORS: dict[str, Callable[[Builder], ResourceCollector]] = {
    CLUSTER_RESOURCE: lambda b: ClusterResourceCollector(b.connect_queries),
    NODE_RESOURCE: lambda b: NodeResourceCollector(b.connect_queries, b.connect_nodes),
}
