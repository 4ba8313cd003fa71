"""
Base interface for resource collectors.

A resource collector declares the metric families it feeds and, once per
refresh, acquires fresh domain objects from the query API. Writing the
objects into a store and scheduling refreshes is the job of the refresh
loop.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import ClassVar, Generic, Protocol, TypeVar

from ..models.metric import FamilyGenerator
from ..query import QueryAdapter


class Identified(Protocol):
    """Domain object stored under a stable identity key."""

    uid: str


T = TypeVar("T", bound=Identified)

QueryConnector = Callable[[], QueryAdapter]


class ResourceCollector(ABC, Generic[T]):
    """
    Abstract base class for resource collectors.

    Each collector is responsible for:
    1. Declaring its metric families (FAMILIES)
    2. Acquiring domain objects on demand (acquire)

    An empty acquisition means "nothing to write this time"; the previous
    objects stay visible.
    """

    # Registry name of the collector kind (override in subclasses)
    NAME: ClassVar[str] = "unknown"

    # Metric families fed by this collector (override in subclasses)
    FAMILIES: ClassVar[Sequence[FamilyGenerator]] = ()

    def __init__(self, connect_queries: QueryConnector):
        """
        Args:
            connect_queries: Factory returning a query adapter; called once
                per acquisition
        """
        self.connect_queries = connect_queries

    @abstractmethod
    async def acquire(self) -> list[T]:
        """
        Query the sources and build this refresh's domain objects.

        Returns:
            Objects to write, or an empty list to leave the store untouched
        """

    def identity(self, obj: T) -> str:
        """Key under which obj replaces its predecessor in the store."""
        return obj.uid

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.NAME!r}, {len(self.FAMILIES)} families)"
