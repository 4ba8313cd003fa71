"""
Metric records and metric family declarations.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class MetricType(Enum):
    """Exposition type of a metric family."""
    GAUGE = "gauge"


@dataclass
class Metric:
    """
    A single exposed value with positionally paired label keys and values.

    Keys are unique within a metric and already exposition-safe.
    """

    value: float = 0.0
    label_keys: list[str] = field(default_factory=list)
    label_values: list[str] = field(default_factory=list)

    def __post_init__(self):
        if len(self.label_keys) != len(self.label_values):
            raise ValueError(
                f"Metric has {len(self.label_keys)} label keys "
                f"but {len(self.label_values)} label values"
            )

    @property
    def labels(self) -> dict[str, str]:
        """Labels as a mapping, in key order."""
        return dict(zip(self.label_keys, self.label_values))

    def add_label(self, key: str, value: str) -> None:
        """Append a label after the existing ones."""
        self.label_keys.append(key)
        self.label_values.append(value)


@dataclass(frozen=True)
class FamilyGenerator(Generic[T]):
    """
    Declares one metric family and how to derive its metrics from a
    domain object of type T.

    Families are declared once per collector module; the type parameter
    ties each generator to the object its collector produces.
    """

    name: str
    help: str
    generate: Callable[[T], list[Metric]]
    type: MetricType = MetricType.GAUGE


def filter_families(
    families: Iterable[FamilyGenerator[T]],
    is_included: Callable[[str], bool],
) -> list[FamilyGenerator[T]]:
    """Keep the families whose name passes the filter, preserving order."""
    return [family for family in families if is_included(family.name)]
