"""
Data models for metrics and metric families.
"""

from .metric import FamilyGenerator, Metric, MetricType, filter_families

__all__ = [
    "Metric",
    "MetricType",
    "FamilyGenerator",
    "filter_families",
]
