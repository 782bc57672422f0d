"""
Parsing session for one log source.

A session detects the log format on its first line and reuses the bound
extractor for every later line. Per-line failures after binding are
reported without ending the session, so one malformed line does not
abort a whole log stream.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .config import ParserSettings
from .detector import FormatDetector
from .exceptions import ParseError, ValidationError
from .extractor import ColumnExtractor
from .pattern import Pattern
from .tokenizer import Tokenizer
from .validation import FieldValidator

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """Counters for one parsing session."""

    lines_parsed: int = 0
    lines_failed: int = 0
    detections: int = 0

    def to_dict(self) -> dict:
        """Convert stats to dictionary."""
        return {
            "lines_parsed": self.lines_parsed,
            "lines_failed": self.lines_failed,
            "detections": self.detections,
        }


class LogSession:
    """
    Owns the bound extractor of one log source.

    Not safe for concurrent use; create one session per consumer.

    Usage:
        session = LogSession(get_default_patterns())
        for fields in session.parse_lines(lines):
            process(fields)
        print(session.info, session.stats.lines_failed)
    """

    def __init__(
        self,
        patterns: Iterable[Pattern],
        tokenizer: Optional[Tokenizer] = None,
        validate_lines: bool = False,
    ):
        """
        Initialize session.

        Args:
            patterns: Candidate patterns, in priority order
            tokenizer: Tokenizer for detection and parsing (default: double quotes)
            validate_lines: If True, validate every line after detection, not
                            only the sample line
        """
        self.tokenizer = tokenizer or Tokenizer()
        self.validator = FieldValidator(self.tokenizer)
        self.detector = FormatDetector(
            patterns, tokenizer=self.tokenizer, validator=self.validator
        )
        self.validate_lines = validate_lines
        self.extractor: Optional[ColumnExtractor] = None
        self.stats = SessionStats()

        # Fail fast on bad configuration, before any line is seen
        self.detector.check_patterns()

    @classmethod
    def from_settings(cls, settings: ParserSettings) -> "LogSession":
        """Build a session from ParserSettings."""
        return cls(
            settings.candidate_patterns(),
            tokenizer=Tokenizer(settings.quote_chars),
            validate_lines=settings.validate_lines,
        )

    @property
    def is_bound(self) -> bool:
        """Whether a format has been detected."""
        return self.extractor is not None

    @property
    def info(self) -> Optional[str]:
        """Diagnostic string of the bound pattern, or None before detection."""
        return self.extractor.info() if self.extractor else None

    def detect(self, line: str) -> ColumnExtractor:
        """
        Detect the format from a sample line and bind the result.

        Raises:
            EmptyInputError: If the line is empty
            ConfigurationError: If any candidate pattern is malformed
            NoMatchError: If no candidate fits and validates
        """
        self.extractor = self.detector.detect(line)
        self.stats.detections += 1
        return self.extractor

    def reset(self) -> None:
        """Drop the bound extractor so the next line triggers re-detection."""
        if self.extractor is not None:
            logger.info(f"Resetting detected format {self.extractor.info()}")
        self.extractor = None

    def parse(self, line: str) -> dict[str, str]:
        """
        Parse one line, detecting the format first if needed.

        The returned mapping is the extractor's scratch buffer and is only
        valid until the next call.

        Raises:
            EmptyInputError, ConfigurationError, NoMatchError: On detection
            TokenizationError, BoundsError: If the line does not fit the layout
            ValidationError: If validate_lines is set and a value is invalid
        """
        if self.extractor is None:
            # The sample line was extracted and validated during detection
            return self.detect(line).fields

        fields = self.extractor.parse(line)
        if self.validate_lines:
            self.validator.validate(fields)
        return fields

    def parse_lines(self, lines: Iterable[str]) -> Iterator[dict[str, str]]:
        """
        Parse many lines, yielding an independent copy of each mapping.

        Blank lines are skipped. Lines that fail to parse or validate are
        logged and counted; detection errors propagate.

        Args:
            lines: Raw log lines (trailing newlines are stripped)

        Yields:
            Field mappings, one per successfully parsed line
        """
        parsed = 0
        failed = 0

        for line_number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            try:
                fields = self.parse(line)
            except (ParseError, ValidationError) as e:
                failed += 1
                self.stats.lines_failed += 1
                logger.debug(f"Skipping line {line_number}: {e}")
                continue

            parsed += 1
            self.stats.lines_parsed += 1
            yield dict(fields)

        logger.info(f"Parsing complete: {parsed} lines parsed, {failed} skipped")
