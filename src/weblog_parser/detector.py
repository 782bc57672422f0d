"""
Access-log format detection.

Tries candidate patterns in order against one sample line and binds the
first one whose columns exist and whose extracted values validate.

Detection per candidate:
    reject  - the pattern is unsorted or invalid; detection aborts
    skip    - the line does not tokenize, is too short, or fails validation
    bind    - the mapping validates; the bound extractor is returned
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from .exceptions import (
    ConfigurationError,
    EmptyInputError,
    NoMatchError,
    TokenizationError,
)
from .extractor import ColumnExtractor
from .pattern import Pattern
from .tokenizer import Tokenizer
from .validation import FieldValidator

logger = logging.getLogger(__name__)


class CandidateOutcome(Enum):
    """Result of trying one candidate pattern against the sample line."""

    SKIP = "skip"
    BIND = "bind"


@dataclass
class CandidateResult:
    """Outcome of one candidate pattern, kept for diagnostics."""

    pattern: Pattern
    outcome: CandidateOutcome
    reason: str = ""


def check_pattern(pattern: Pattern) -> None:
    """
    Reject a pattern that must never be used for detection.

    Raises:
        ConfigurationError: If the pattern is unsorted or structurally invalid
    """
    if not pattern.is_sorted():
        raise ConfigurationError("pattern is not sorted", pattern=pattern.info())
    if not pattern.is_valid():
        raise ConfigurationError("pattern is not valid", pattern=pattern.info())


class FormatDetector:
    """
    Finds which candidate pattern a log source uses.

    Candidates are tried in the given order; the first that fits and
    validates wins. Detection is meant to run once per log source: the
    returned extractor handles every later line without re-validation.

    Usage:
        detector = FormatDetector([pattern_a, pattern_b])
        extractor = detector.detect('192.168.1.1 200 1024')
        fields = extractor.parse(next_line)
    """

    def __init__(
        self,
        patterns: Iterable[Pattern],
        tokenizer: Optional[Tokenizer] = None,
        validator: Optional[FieldValidator] = None,
    ):
        """
        Initialize detector.

        Args:
            patterns: Candidate patterns, in priority order
            tokenizer: Tokenizer shared by detection and the bound extractor
            validator: Field validator (default: one using the same tokenizer)
        """
        self.patterns = list(patterns)
        self.tokenizer = tokenizer or Tokenizer()
        self.validator = validator or FieldValidator(self.tokenizer)
        self.attempts: list[CandidateResult] = []

    def check_patterns(self) -> None:
        """
        Check every candidate before any line is tokenized.

        Raises:
            ConfigurationError: On the first unsorted or invalid pattern
        """
        for pattern in self.patterns:
            check_pattern(pattern)

    def detect(self, line: str) -> ColumnExtractor:
        """
        Detect the layout of a sample line.

        Args:
            line: Non-empty sample line from the log source

        Returns:
            Extractor bound to the first matching pattern

        Raises:
            EmptyInputError: If the line is empty
            ConfigurationError: If any candidate pattern is malformed
            NoMatchError: If no candidate fits and validates
        """
        if not line or not line.strip():
            raise EmptyInputError("empty line")

        self.check_patterns()
        self.attempts = []

        try:
            tokens: Optional[list[str]] = self.tokenizer.tokenize(line)
            tokenize_error = ""
        except TokenizationError as e:
            tokens = None
            tokenize_error = e.message

        for pattern in self.patterns:
            result = self._try_candidate(pattern, tokens, tokenize_error)
            self.attempts.append(result)

            if result.outcome is CandidateOutcome.SKIP:
                logger.debug(f"Skipping pattern {pattern.info()}: {result.reason}")
                continue

            extractor = ColumnExtractor(pattern, self.tokenizer)
            # Sample line is the extractor's first result
            extractor.extract(tokens, line=line)
            logger.info(f"Detected log format: {extractor.info()}")
            return extractor

        raise NoMatchError("can't find appropriate parser", attempts=self.attempts)

    def _try_candidate(
        self,
        pattern: Pattern,
        tokens: Optional[Sequence[str]],
        tokenize_error: str,
    ) -> CandidateResult:
        """Classify one candidate as skip or bind."""
        if tokens is None:
            return CandidateResult(pattern, CandidateOutcome.SKIP, tokenize_error)

        if pattern.max_index() >= len(tokens):
            return CandidateResult(
                pattern,
                CandidateOutcome.SKIP,
                f"needs {pattern.max_index() + 1} columns, line has {len(tokens)}",
            )

        mapping = pattern.extract(tokens)
        error = self.validator.first_violation(mapping)
        if error is not None:
            return CandidateResult(pattern, CandidateOutcome.SKIP, error.message)

        return CandidateResult(pattern, CandidateOutcome.BIND)


def detect_parser(
    line: str,
    patterns: Iterable[Pattern],
    tokenizer: Optional[Tokenizer] = None,
) -> ColumnExtractor:
    """
    Detect the layout of a sample line against candidate patterns.

    Convenience wrapper around FormatDetector.

    Raises:
        EmptyInputError: If the line is empty
        ConfigurationError: If any candidate pattern is malformed
        NoMatchError: If no candidate fits and validates
    """
    return FormatDetector(patterns, tokenizer=tokenizer).detect(line)
