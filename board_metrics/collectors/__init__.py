"""
Resource collectors feeding the board_* metric families.
"""

from .base import ResourceCollector
from .cluster import ClusterResourceCollector, ClusterValue
from .node import NodeResourceCollector, NodeValues

__all__ = [
    "ResourceCollector",
    "ClusterResourceCollector",
    "ClusterValue",
    "NodeResourceCollector",
    "NodeValues",
]
