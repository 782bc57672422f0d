"""
Parser settings and configuration management.

Supports loading from:
1. YAML files (weblog-parser.yaml)
2. Environment variables (fallback)

Example YAML:
    use_default_patterns: true
    quote_chars: '"'
    validate_lines: false
    log_level: INFO
    custom_patterns:
      - ["address:0", "request:5", "code:6", "bytes_sent:7", "user_defined:8"]
      - - {key: vhost, index: 0}
        - {key: address, index: 1}
        - {key: code, index: 7}
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..catalog import get_default_patterns
from ..exceptions import ConfigurationError
from ..pattern import Pattern, patterns_from_config

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default config file path
DEFAULT_CONFIG_PATH = Path("weblog-parser.yaml")


@dataclass
class ParserSettings:
    """
    Settings for format detection and line parsing.

    Attributes:
        use_default_patterns: Append the built-in nginx/Apache patterns to
                              the candidates
        custom_patterns: User patterns, tried before the built-in ones
        quote_chars: Characters that delimit a quoted token
        validate_lines: Validate every line after detection, not only the
                        sample line
        log_level: Logging level name for scripts
    """

    use_default_patterns: bool = True
    custom_patterns: list[Pattern] = field(default_factory=list)
    quote_chars: str = '"'
    validate_lines: bool = False
    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if not self.quote_chars:
            errors.append("quote_chars must not be empty")
        elif any(c.isspace() for c in self.quote_chars):
            errors.append(f"quote_chars must not contain whitespace, got {self.quote_chars!r}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )

        if not self.use_default_patterns and not self.custom_patterns:
            errors.append("no candidate patterns: enable defaults or add custom_patterns")

        for position, pattern in enumerate(self.custom_patterns):
            if not pattern.is_sorted():
                errors.append(f"custom pattern #{position} is not sorted: {pattern.info()}")
            elif not pattern.is_valid():
                errors.append(f"custom pattern #{position} is not valid: {pattern.info()}")

        return errors

    def candidate_patterns(self) -> list[Pattern]:
        """Custom patterns first, then the built-in catalog if enabled."""
        patterns = list(self.custom_patterns)
        if self.use_default_patterns:
            patterns.extend(get_default_patterns())
        return patterns

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "use_default_patterns": self.use_default_patterns,
            "custom_patterns": [
                [str(f) for f in pattern.fields] for pattern in self.custom_patterns
            ],
            "quote_chars": self.quote_chars,
            "validate_lines": self.validate_lines,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ParserSettings":
        """
        Create from configuration dictionary.

        Raises:
            ConfigurationError: If custom_patterns is malformed
        """
        return cls(
            use_default_patterns=bool(config.get("use_default_patterns", True)),
            custom_patterns=patterns_from_config(config.get("custom_patterns")),
            quote_chars=str(config.get("quote_chars", '"')),
            validate_lines=bool(config.get("validate_lines", False)),
            log_level=str(config.get("log_level", "INFO")).upper(),
        )

    @classmethod
    def from_env(cls) -> "ParserSettings":
        """
        Create from environment variables.

        WEBLOG_PARSER_CUSTOM_PATTERNS holds patterns separated by ';', each a
        comma-separated list of key:index fields.
        """

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return os.environ.get(key, str(default).lower()).lower() == "true"

        raw_patterns = os.environ.get("WEBLOG_PARSER_CUSTOM_PATTERNS", "")
        custom = [
            [item.strip() for item in chunk.split(",") if item.strip()]
            for chunk in raw_patterns.split(";")
            if chunk.strip()
        ]

        return cls(
            use_default_patterns=safe_bool("WEBLOG_PARSER_USE_DEFAULT_PATTERNS", True),
            custom_patterns=patterns_from_config(custom),
            quote_chars=os.environ.get("WEBLOG_PARSER_QUOTE_CHARS", '"') or '"',
            validate_lines=safe_bool("WEBLOG_PARSER_VALIDATE_LINES", False),
            log_level=os.environ.get("WEBLOG_PARSER_LOG_LEVEL", "INFO").upper(),
        )


def load_config_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Configuration as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping, got {type(config).__name__}"
        )
    return config


@lru_cache
def get_settings(config_path: Optional[str] = None) -> ParserSettings:
    """
    Get cached settings instance.

    Loads from the YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        ParserSettings instance

    Raises:
        ConfigurationError: If the config file exists but is malformed
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        logger.debug(f"Loading parser settings from {path}")
        return ParserSettings.from_dict(load_config_file(path))

    if config_path:
        logger.warning(f"Config file {path} not found, using environment variables")

    return ParserSettings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
