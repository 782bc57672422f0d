"""
Adaptive format detection and field extraction for web-server access logs.

Given one sample line and an ordered list of candidate column patterns,
detects which layout the log uses, binds a reusable extractor to it, and
validates that the extracted values are syntactically sane.

Usage:
    from weblog_parser import (
        LogSession,
        Pattern,
        detect_parser,
        get_default_patterns,
    )

    # Detect once, then parse every line with the bound extractor
    pattern = Pattern([("address", 0), ("code", 1), ("bytes_sent", 2)])
    extractor = detect_parser("192.168.1.1 200 1024", [pattern])
    fields = extractor.parse("10.0.0.7 404 0")

    # Or let a session own detection and per-line error handling
    session = LogSession(get_default_patterns())
    for fields in session.parse_lines(lines):
        print(fields["code"])
"""

from .catalog import DEFAULT_PATTERNS, describe_patterns, get_default_patterns
from .config import ParserSettings, clear_settings_cache, get_settings
from .detector import (
    CandidateOutcome,
    CandidateResult,
    FormatDetector,
    check_pattern,
    detect_parser,
)
from .exceptions import (
    BoundsError,
    ConfigurationError,
    EmptyInputError,
    NoMatchError,
    ParseError,
    TokenizationError,
    ValidationError,
    WeblogParserError,
)
from .extractor import REQUEST_PATTERN, ColumnExtractor, LineParser
from .pattern import Pattern, PatternField, patterns_from_config
from .schema import FIELD_KEYS, FieldKey
from .session import LogSession, SessionStats
from .tokenizer import Tokenizer
from .validation import FieldValidator, validate_fields

__all__ = [
    # Data model
    "FieldKey",
    "FIELD_KEYS",
    "Pattern",
    "PatternField",
    "patterns_from_config",
    # Tokenizing and extraction
    "Tokenizer",
    "LineParser",
    "ColumnExtractor",
    "REQUEST_PATTERN",
    # Validation
    "FieldValidator",
    "validate_fields",
    # Detection
    "FormatDetector",
    "CandidateOutcome",
    "CandidateResult",
    "check_pattern",
    "detect_parser",
    # Sessions
    "LogSession",
    "SessionStats",
    # Catalog
    "DEFAULT_PATTERNS",
    "get_default_patterns",
    "describe_patterns",
    # Settings
    "ParserSettings",
    "get_settings",
    "clear_settings_cache",
    # Exceptions
    "WeblogParserError",
    "ConfigurationError",
    "EmptyInputError",
    "NoMatchError",
    "ParseError",
    "TokenizationError",
    "BoundsError",
    "ValidationError",
]
