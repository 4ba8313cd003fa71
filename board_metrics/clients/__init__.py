"""
Clients for the services metrics are derived from.
"""

from .kubernetes import NodeInfo, NodeLister, NodeListingError
from .prometheus import PrometheusClient, PrometheusError, QueryResult, VectorSample

__all__ = [
    "PrometheusClient",
    "PrometheusError",
    "QueryResult",
    "VectorSample",
    "NodeLister",
    "NodeInfo",
    "NodeListingError",
]
