"""
Tests for the metric store.
"""

from dataclasses import dataclass

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from board_metrics.models.metric import FamilyGenerator, Metric
from board_metrics.store import MetricsStore


@dataclass
class Reading:
    uid: str
    values: list[tuple[str, float]]


FAMILIES = [
    FamilyGenerator(
        name="test_reading",
        help="Test reading",
        generate=lambda r: [
            Metric(value=v, label_keys=["instance"], label_values=[i]) for i, v in r.values
        ],
    ),
    FamilyGenerator(
        name="test_reading_count",
        help="Number of readings",
        generate=lambda r: [Metric(value=len(r.values))],
    ),
]


@pytest.fixture
def store() -> MetricsStore[Reading]:
    return MetricsStore(FAMILIES)


def test_update_replaces_entry(store) -> None:
    """Test that an update replaces the entry for its key."""
    store.update("a", Reading("a", [("x", 1.0), ("y", 2.0)]))
    store.update("a", Reading("a", [("z", 3.0)]))

    rendered = store.get("a")

    assert [m.labels for m in rendered["test_reading"]] == [{"instance": "z"}]
    assert rendered["test_reading_count"][0].value == 1


def test_collect_follows_family_order(store) -> None:
    """Test that collect yields families in declaration order."""
    store.update("a", Reading("a", [("x", 0.5)]))
    store.update("b", Reading("b", [("y", 0.7)]))

    families = list(store.collect())

    assert [f.name for f in families] == ["test_reading", "test_reading_count"]
    assert [(s.labels, s.value) for s in families[0].samples] == [
        ({"instance": "x"}, 0.5),
        ({"instance": "y"}, 0.7),
    ]


def test_empty_store_still_declares_families(store) -> None:
    """Test that an empty store still yields every family."""
    families = list(store.collect())

    assert [f.name for f in families] == ["test_reading", "test_reading_count"]
    assert all(f.samples == [] for f in families)


def test_delete_and_replace(store) -> None:
    """Test delete and replace."""
    store.update("a", Reading("a", [("x", 1.0)]))
    store.update("b", Reading("b", [("y", 1.0)]))

    store.delete("a")
    store.delete("missing")
    assert store.keys() == ["b"]
    assert store.get("a") is None

    store.replace([("c", Reading("c", []))])
    assert store.keys() == ["c"]


def test_exposition(store) -> None:
    """Test the text exposition of stored metrics."""
    registry = CollectorRegistry()
    registry.register(store)
    store.update("a", Reading("a", [("10.0.0.5:9100", 0.42)]))

    output = generate_latest(registry).decode()

    assert "# HELP test_reading Test reading" in output
    assert "# TYPE test_reading gauge" in output
    assert 'test_reading{instance="10.0.0.5:9100"} 0.42' in output
    assert "test_reading_count 1.0" in output
