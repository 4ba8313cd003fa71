"""
Configuration loader with file reading and validation.
"""

from pathlib import Path

from ..const import COLLECTOR_KINDS
from ..filter import AllowDenyList, FilterError
from .lexer import LexerError
from .parser import ConfigDocument, ParseError, parse_config, parse_config_file
from .schema import Config


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class ConfigLoader:
    """
    Loads and validates configuration from files or strings.

    Usage:
        loader = ConfigLoader()
        config = loader.load_file("/etc/board-metrics/config.conf")
        # or
        config = loader.load_string(config_text)
    """

    # Known directives for each block type
    KNOWN_DIRECTIVES = {
        "prometheus": {"url", "timeout"},
        "kubernetes": {"apiserver", "kubeconfig", "namespaces"},
        "exporter": {"listen", "port", "refresh_interval", "collectors", "build_all"},
        "metrics": {"allow", "deny"},
        "logging": {
            "level",
            "file",
            "file_level",
            "file_max_size",
            "file_keep",
            "colors",
            "format",
        },
    }

    def __init__(self):
        self.last_document: ConfigDocument | None = None

    def _build(self, document: ConfigDocument) -> Config:
        self.last_document = document
        config = Config.from_document(document)
        # Fails early on conflicting lists or bad patterns
        AllowDenyList(config.metrics.allow, config.metrics.deny)
        return config

    def load_file(self, path: str | Path) -> Config:
        """
        Load configuration from a file.

        Args:
            path: Path to the configuration file

        Returns:
            Validated Config object

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigError(f"Not a file: {path}")

        try:
            return self._build(parse_config_file(path))
        except (LexerError, ParseError) as e:
            raise ConfigError(f"Failed to parse configuration: {e}") from e
        except FilterError as e:
            raise ConfigError(f"Invalid metrics filter: {e}") from e
        except Exception as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

    def load(self, path: str | Path) -> Config:
        """Alias for load_file."""
        return self.load_file(path)

    def load_string(self, source: str, filename: str = "<string>") -> Config:
        """
        Load configuration from a string.

        Raises:
            ConfigError: If configuration cannot be parsed
        """
        try:
            return self._build(parse_config(source, filename))
        except (LexerError, ParseError) as e:
            raise ConfigError(f"Failed to parse configuration: {e}") from e
        except FilterError as e:
            raise ConfigError(f"Invalid metrics filter: {e}") from e
        except Exception as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

    def validate(self, config: Config) -> list[str]:
        """
        Validate configuration and return list of warnings.

        Args:
            config: Configuration to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if self.last_document:
            warnings.extend(self._check_unknown_directives(self.last_document))

        if not config.prometheus.url:
            warnings.append("Prometheus URL is not configured")

        for name in config.exporter.collectors:
            if name not in COLLECTOR_KINDS:
                warnings.append(
                    f"Unknown collector '{name}' (available: {', '.join(COLLECTOR_KINDS)})"
                )

        if config.exporter.build_all and config.exporter.collectors:
            warnings.append("build_all is on; the collectors selection is ignored")

        if config.exporter.refresh_interval < 1.0:
            warnings.append(
                f"Refresh interval {config.exporter.refresh_interval}s is below 1s"
            )

        return warnings

    def _check_unknown_directives(self, document: ConfigDocument) -> list[str]:
        """Check for unknown blocks and directives in parsed document."""
        warnings = []

        for block in document.blocks:
            known = self.KNOWN_DIRECTIVES.get(block.type)
            if known is None:
                warnings.append(f"Unknown block '{block.type}' (line {block.line})")
                continue

            for directive in block.directives:
                if directive.name not in known:
                    warnings.append(
                        f"Unknown directive '{directive.name}' in {block.type} block "
                        f"(line {directive.line})"
                    )

        for directive in document.directives:
            warnings.append(
                f"Unknown top-level directive '{directive.name}' (line {directive.line})"
            )

        return warnings
