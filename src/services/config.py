"""Configuration service for managing generator settings."""

import json
from pathlib import Path
from urllib.parse import urlparse

import structlog

from ..models import DEFAULT_VARIANTS, IndexConfig, YearMonth

log = structlog.stdlib.get_logger()

ConfigValue = str | list[str]


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing generator configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "db-index" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> IndexConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults", config_path=str(self.config_path))
            return IndexConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data: dict[str, ConfigValue] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return IndexConfig()

            log.info("Configuration loaded successfully", config_path=str(self.config_path))
            return config

        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return IndexConfig()

    def validate_config(self, config: IndexConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        parsed_url = urlparse(config.base_url) if isinstance(config.base_url, str) else None
        if parsed_url is None or parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
            errors.append("base_url must be an absolute http(s) URL")

        if not config.variants:
            errors.append("variants cannot be empty")
        elif not all(isinstance(v, str) and self._is_plain_name(v) for v in config.variants):
            errors.append("variants must be plain directory names")
        elif len(set(config.variants)) != len(config.variants):
            errors.append("variants must not repeat")

        if not isinstance(config.broadcast_directory, str) or not self._is_plain_name(config.broadcast_directory):
            errors.append("broadcast_directory must be a plain directory name")
        elif config.broadcast_directory in config.variants:
            errors.append("broadcast_directory must differ from every variant")

        if not isinstance(config.clock_since, str) or YearMonth.parse(config.clock_since) is None:
            errors.append("clock_since must be a YYYY-MM month")

        for field in ("output_file", "list_file"):
            value = getattr(config, field)
            if not isinstance(value, str) or not self._is_plain_name(value):
                errors.append(f"{field} must be a plain file name")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if config.log_level not in valid_log_levels:
            errors.append(f"log_level must be one of: {', '.join(sorted(valid_log_levels))}")

        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def _is_plain_name(name: str) -> bool:
        return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name

    def _dict_to_config(self, data: dict[str, ConfigValue]) -> IndexConfig:
        """Convert dictionary to IndexConfig; absent keys take their defaults."""
        defaults = IndexConfig()

        variants_raw = data.get("variants", list(DEFAULT_VARIANTS))
        variants = tuple(variants_raw) if isinstance(variants_raw, list) else ()

        def text(key: str, default: str) -> str:
            value = data.get(key, default)
            return value if isinstance(value, str) else ""

        return IndexConfig(
            base_url=text("base_url", defaults.base_url),
            variants=variants,
            broadcast_directory=text("broadcast_directory", defaults.broadcast_directory),
            clock_since=text("clock_since", defaults.clock_since),
            output_file=text("output_file", defaults.output_file),
            list_file=text("list_file", defaults.list_file),
            log_level=text("log_level", defaults.log_level).upper(),
        )
