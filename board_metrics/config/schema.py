"""
Configuration schema with dataclasses for validation and type safety.

Each section maps one top-level block of the configuration file.
"""

from dataclasses import dataclass, field
from typing import Any

from ..const import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LISTEN_PORT,
    DEFAULT_PROMETHEUS_URL,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_REFRESH_INTERVAL,
)
from .parser import Block, ConfigDocument


def _as_seconds(value: Any, default: float) -> float:
    """Accept durations (10s) and plain numbers; anything else falls back."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _as_strings(values: list[Any]) -> list[str]:
    return [str(v) for v in values]


@dataclass
class PrometheusConfig:
    """Time-series query API connection."""

    url: str = DEFAULT_PROMETHEUS_URL
    timeout: float = DEFAULT_QUERY_TIMEOUT

    @classmethod
    def from_block(cls, block: Block | None) -> "PrometheusConfig":
        """Create PrometheusConfig from a parsed 'prometheus' block."""
        if block is None:
            return cls()

        return cls(
            url=str(block.get_value("url", DEFAULT_PROMETHEUS_URL)),
            timeout=_as_seconds(block.get_value("timeout"), DEFAULT_QUERY_TIMEOUT),
        )


@dataclass
class KubernetesConfig:
    """
    Kubernetes API access for node listing.

    Empty apiserver and kubeconfig mean in-cluster configuration.
    Namespaces are accepted for compatibility and not used by any collector.
    """

    apiserver: str = ""
    kubeconfig: str = ""
    namespaces: list[str] = field(default_factory=list)

    @classmethod
    def from_block(cls, block: Block | None) -> "KubernetesConfig":
        """Create KubernetesConfig from a parsed 'kubernetes' block."""
        if block is None:
            return cls()

        return cls(
            apiserver=str(block.get_value("apiserver", "")),
            kubeconfig=str(block.get_value("kubeconfig", "")),
            namespaces=_as_strings(block.get_all_values("namespaces")),
        )


@dataclass
class ExporterConfig:
    """Scrape endpoint and refresh settings."""

    listen: str = DEFAULT_LISTEN_ADDRESS
    port: int = DEFAULT_LISTEN_PORT
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    collectors: list[str] = field(default_factory=list)  # empty = all
    build_all: bool = False

    @classmethod
    def from_block(cls, block: Block | None) -> "ExporterConfig":
        """Create ExporterConfig from a parsed 'exporter' block."""
        if block is None:
            return cls()

        return cls(
            listen=str(block.get_value("listen", DEFAULT_LISTEN_ADDRESS)),
            port=int(block.get_value("port", DEFAULT_LISTEN_PORT)),
            refresh_interval=_as_seconds(
                block.get_value("refresh_interval"), DEFAULT_REFRESH_INTERVAL
            ),
            collectors=_as_strings(block.get_all_values("collectors")),
            build_all=bool(block.get_value("build_all", False)),
        )


@dataclass
class MetricsConfig:
    """Allow/deny lists of metric family name patterns."""

    allow: list[str] = field(default_factory=list)
    deny: list[str] = field(default_factory=list)

    @classmethod
    def from_block(cls, block: Block | None) -> "MetricsConfig":
        """Create MetricsConfig from a parsed 'metrics' block."""
        if block is None:
            return cls()

        return cls(
            allow=_as_strings(block.get_all_values("allow")),
            deny=_as_strings(block.get_all_values("deny")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"  # debug, info, warning, error
    file: str | None = None  # Log file path
    file_level: str = "debug"
    file_max_size: int = 10  # Max file size in MB
    file_keep: int = 5  # Number of backup files to keep
    colors: bool = True
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @classmethod
    def from_block(cls, block: Block | None) -> "LoggingConfig":
        """Create LoggingConfig from a parsed 'logging' block."""
        if block is None:
            return cls()

        return cls(
            level=str(block.get_value("level", "info")),
            file=block.get_value("file"),
            file_level=str(block.get_value("file_level", "debug")),
            file_max_size=int(block.get_value("file_max_size", 10)),
            file_keep=int(block.get_value("file_keep", 5)),
            colors=bool(block.get_value("colors", True)),
            format=block.get_value("format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s"),
        )


@dataclass
class Config:
    """Complete application configuration."""

    prometheus: PrometheusConfig = field(default_factory=PrometheusConfig)
    kubernetes: KubernetesConfig = field(default_factory=KubernetesConfig)
    exporter: ExporterConfig = field(default_factory=ExporterConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_document(cls, doc: ConfigDocument) -> "Config":
        """Create Config from a parsed ConfigDocument."""
        return cls(
            prometheus=PrometheusConfig.from_block(doc.get_block("prometheus")),
            kubernetes=KubernetesConfig.from_block(doc.get_block("kubernetes")),
            exporter=ExporterConfig.from_block(doc.get_block("exporter")),
            metrics=MetricsConfig.from_block(doc.get_block("metrics")),
            logging=LoggingConfig.from_block(doc.get_block("logging")),
        )
