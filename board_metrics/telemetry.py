"""
Self-telemetry of the refresh loops.
"""

from prometheus_client import CollectorRegistry, Counter, Summary


class RefreshTelemetry:
    """Refresh error and object counts, labeled by collector kind."""

    def __init__(self, registry: CollectorRegistry):
        self.errors = Counter(
            "board_scrape_error",
            "Total scrape errors encountered when scraping a resource",
            ["resource"],
            registry=registry,
        )
        self.resources = Summary(
            "board_resources_per_scrape",
            "Number of resources returned per scrape",
            ["resource"],
            registry=registry,
        )

    def record_error(self, resource: str) -> None:
        self.errors.labels(resource=resource).inc()

    def record_resources(self, resource: str, count: int) -> None:
        self.resources.labels(resource=resource).observe(count)
