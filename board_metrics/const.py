"""
Application constants and metadata.
"""

# Application info
APP_NAME = "Board Metrics"
APP_VERSION = "0.1.0"
USER_AGENT = f"board-metrics/{APP_VERSION}"

# Default values
DEFAULT_REFRESH_INTERVAL = 15.0
DEFAULT_QUERY_TIMEOUT = 30.0
DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_LISTEN_PORT = 8080
DEFAULT_PROMETHEUS_URL = "http://localhost:9090"

# Refresh loop back-off after an unexpected fault
FAULT_BACKOFF_INITIAL = 5.0
FAULT_BACKOFF_MAX = 60.0

# Collector kinds
CLUSTER_RESOURCE = "clusterresource"
NODE_RESOURCE = "noderesource"
COLLECTOR_KINDS = (CLUSTER_RESOURCE, NODE_RESOURCE)
