"""
Entry point for Board Metrics.

Usage:
    python -m board_metrics /path/to/config.conf
    python -m board_metrics --help
"""

import argparse
import asyncio
import sys
from pathlib import Path

from . import __version__
from .app import run_app
from .config.loader import ConfigError, ConfigLoader
from .config.schema import Config
from .logging import LogConfig, get_logger, setup_logging

logger = get_logger("main")

DEFAULT_CONFIG_PATH = "/etc/board-metrics/config.conf"


def validate_config(config_path: str | None) -> int:
    """Validate configuration file and print warnings."""
    try:
        loader = ConfigLoader()
        config = loader.load_file(config_path) if config_path else Config()

        warnings = loader.validate(config)

        if warnings:
            print(f"Configuration warnings ({len(warnings)}):")
            for warning in warnings:
                print(f"  - {warning}")

        exporter = config.exporter
        print("\nConfiguration summary:")
        print(f"  Prometheus: {config.prometheus.url} (timeout {config.prometheus.timeout}s)")
        print(f"  Kubernetes API: {config.kubernetes.apiserver or 'in-cluster / kubeconfig'}")
        if config.kubernetes.kubeconfig:
            print(f"  Kubeconfig: {config.kubernetes.kubeconfig}")
        print(f"  Listen: {exporter.listen}:{exporter.port}")
        print(f"  Refresh interval: {exporter.refresh_interval}s")
        if exporter.build_all or not exporter.collectors:
            print("  Collectors: all")
        else:
            print(f"  Collectors: {', '.join(exporter.collectors)}")
        if config.metrics.allow:
            print(f"  Allowed metrics: {', '.join(config.metrics.allow)}")
        if config.metrics.deny:
            print(f"  Denied metrics: {', '.join(config.metrics.deny)}")
        print(f"  Logging level: {config.logging.level}")

        print("\nConfiguration is valid!")
        return 0

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="board-metrics",
        description="Cluster and node utilization gauges for Prometheus",
    )

    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args()

    # A missing default file means built-in defaults; an explicit one must exist
    config_path: str | None = args.config
    if not Path(args.config).exists():
        if args.config != DEFAULT_CONFIG_PATH:
            print(f"Configuration file not found: {args.config}", file=sys.stderr)
            return 1
        config_path = None

    log_config = LogConfig()

    if args.debug:
        log_config.console_level = "debug"
    elif args.verbose:
        log_config.console_level = "info"
    elif args.quiet:
        log_config.console_level = "error"
    else:
        log_config.console_level = "warning"

    if args.no_color:
        log_config.console_colors = False

    if args.log_file:
        log_config.file_enabled = True
        log_config.file_path = args.log_file

    setup_logging(log_config)

    if args.validate:
        return validate_config(config_path)

    try:
        asyncio.run(run_app(config_path, cli_log_config=log_config))
        return 0
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
