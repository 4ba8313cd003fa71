"""
Metric store shared between refresh loops (writers) and scrapes (readers).

Objects are rendered into their family metrics when written, so a scrape
only ever copies finished lists. Writes replace the whole entry of one
identity under a lock; readers never observe a half-written object.
"""

import threading
from collections.abc import Iterable, Iterator, Sequence
from typing import Generic, TypeVar

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from .models.metric import FamilyGenerator, Metric

T = TypeVar("T")


class MetricsStore(Collector, Generic[T]):
    """Per-identity rendered metrics for a fixed list of families."""

    def __init__(self, families: Sequence[FamilyGenerator[T]]):
        self.families = list(families)
        self._lock = threading.Lock()
        self._entries: dict[str, list[list[Metric]]] = {}

    def _render(self, obj: T) -> list[list[Metric]]:
        return [family.generate(obj) for family in self.families]

    def update(self, key: str, obj: T) -> None:
        """Replace whatever is stored under key with obj's metrics."""
        rendered = self._render(obj)
        with self._lock:
            self._entries[key] = rendered

    def delete(self, key: str) -> None:
        """Drop the metrics stored under key, if any."""
        with self._lock:
            self._entries.pop(key, None)

    def replace(self, items: Iterable[tuple[str, T]]) -> None:
        """Swap the whole content for the given (key, object) pairs."""
        rendered = {key: self._render(obj) for key, obj in items}
        with self._lock:
            self._entries = rendered

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def get(self, key: str) -> dict[str, list[Metric]] | None:
        """Rendered metrics for key, by family name."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        return {family.name: metrics for family, metrics in zip(self.families, entry)}

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Render every family for every stored identity."""
        with self._lock:
            entries = list(self._entries.values())

        for index, family in enumerate(self.families):
            exposed = GaugeMetricFamily(family.name, family.help)
            for entry in entries:
                for metric in entry[index]:
                    exposed.add_sample(family.name, metric.labels, metric.value)
            yield exposed

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Family headers only, so registration needs no data."""
        for family in self.families:
            yield GaugeMetricFamily(family.name, family.help)
