"""
Board Metrics - cluster and node utilization gauges for Prometheus.
"""

from .const import APP_VERSION

__version__ = APP_VERSION
