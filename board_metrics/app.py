"""
Main application orchestrator.

Handles:
- Configuration loading
- Collector unit construction and registration
- The /metrics HTTP endpoint
- Graceful shutdown
"""

import asyncio
import signal

from prometheus_client import CollectorRegistry, start_http_server

from .builder import Builder, CollectorUnit
from .config.loader import ConfigLoader
from .config.schema import Config
from .filter import AllowDenyList
from .logging import LogConfig, get_logger, setup_logging
from .telemetry import RefreshTelemetry

logger = get_logger("app")


class Application:
    """
    Main application class.

    Builds the collector units, exposes them over HTTP and keeps their
    refresh loops running until a shutdown signal arrives.
    """

    def __init__(self, config: Config):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        self.config = config
        self.registry = CollectorRegistry()
        self.telemetry = RefreshTelemetry(self.registry)
        self.units: list[CollectorUnit] = []

        self._http_server = None
        self._tasks: list[asyncio.Task] = []
        self._shutdown_event = asyncio.Event()

    def _create_units(self) -> list[CollectorUnit]:
        """Build all configured collector units."""
        cfg = self.config
        allow_deny = AllowDenyList(cfg.metrics.allow, cfg.metrics.deny)
        logger.info(f"Metric filter: {allow_deny.status()}")

        return (
            Builder()
            .with_apiserver(cfg.kubernetes.apiserver)
            .with_kubeconfig(cfg.kubernetes.kubeconfig)
            .with_namespaces(cfg.kubernetes.namespaces)
            .with_prometheus(cfg.prometheus.url)
            .with_query_timeout(cfg.prometheus.timeout)
            .with_refresh_interval(cfg.exporter.refresh_interval)
            .with_enabled_collectors(cfg.exporter.collectors)
            .with_build_all(cfg.exporter.build_all)
            .with_allow_deny_filter(allow_deny)
            .with_telemetry(self.telemetry)
            .build()
        )

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._signal_handler)

    def _signal_handler(self) -> None:
        """Handle shutdown signals."""
        logger.info("Received shutdown signal")
        self._shutdown_event.set()

    async def start(self) -> None:
        """Start the application and wait for shutdown."""
        logger.info("Starting Board Metrics")

        self.units = self._create_units()
        for unit in self.units:
            self.registry.register(unit)

        exporter = self.config.exporter
        self._http_server, _ = start_http_server(
            exporter.port, addr=exporter.listen, registry=self.registry
        )
        logger.info(f"Serving metrics on http://{exporter.listen}:{exporter.port}/metrics")

        self._setup_signal_handlers()

        for unit in self.units:
            self._tasks.append(unit.start(self._shutdown_event))

        logger.info("Board Metrics started successfully")

        await self._shutdown_event.wait()
        await self.stop()

    async def stop(self) -> None:
        """Stop the application."""
        logger.info("Stopping Board Metrics")

        self._shutdown_event.set()

        # Loops exit on their own once the event is set; cancel stragglers
        # stuck in a slow query
        if self._tasks:
            _, pending = await asyncio.wait(self._tasks, timeout=5.0)
            for task in pending:
                task.cancel()
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

        if self._http_server is not None:
            self._http_server.shutdown()
            self._http_server.server_close()
            self._http_server = None

        logger.info("Board Metrics stopped")

    async def run(self) -> None:
        """Run the application until shutdown."""
        try:
            await self.start()
        except KeyboardInterrupt:
            pass
        except Exception as e:
            logger.error(f"Application error: {e}")
            raise


async def run_app(config_path: str | None, cli_log_config: LogConfig | None = None) -> None:
    """
    Load configuration and run the application.

    Args:
        config_path: Path to configuration file (built-in defaults if None)
        cli_log_config: Logging config from CLI args (overrides file config)
    """
    loader = ConfigLoader()
    config = loader.load_file(config_path) if config_path else Config()

    if cli_log_config is None:
        setup_logging(
            LogConfig(
                console_level=config.logging.level,
                console_colors=config.logging.colors,
                file_enabled=config.logging.file is not None,
                file_path=config.logging.file or "/var/log/board-metrics/board-metrics.log",
                file_level=config.logging.file_level,
                file_max_bytes=config.logging.file_max_size * 1024 * 1024,
                file_backup_count=config.logging.file_keep,
                format=config.logging.format,
            )
        )
    else:
        # CLI args override file config, but keep the file log from config
        if not cli_log_config.file_enabled and config.logging.file:
            cli_log_config.file_enabled = True
            cli_log_config.file_path = config.logging.file
            cli_log_config.file_level = config.logging.file_level
            cli_log_config.file_max_bytes = config.logging.file_max_size * 1024 * 1024
            cli_log_config.file_backup_count = config.logging.file_keep
        setup_logging(cli_log_config)

    if config_path:
        logger.info(f"Loaded configuration from {config_path}")
    else:
        logger.info("No configuration file; using built-in defaults")
    logger.debug(f"Prometheus: {config.prometheus.url}")

    for warning in loader.validate(config):
        logger.warning(f"Config warning: {warning}")

    app = Application(config)
    await app.run()
