"""
Line parsers bound to a detected log layout.

Provides the LineParser interface and its column-position implementation,
which tokenizes a line and copies the pattern's columns into a reused
field mapping.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .exceptions import BoundsError, ConfigurationError
from .pattern import Pattern
from .schema import REQUEST_SUBFIELDS
from .tokenizer import Tokenizer


# Column layout of the composite request field ("GET /path HTTP/1.1")
REQUEST_PATTERN = Pattern([(key, index) for index, key in enumerate(REQUEST_SUBFIELDS)])


class LineParser(ABC):
    """
    Abstract interface for parsers bound to one log layout.

    Implementations own their result buffer: the mapping returned by
    ``parse`` is only valid until the next ``parse`` call on the same
    instance. Use ``snapshot`` to keep a result.
    """

    @abstractmethod
    def parse(self, line: str) -> dict[str, str]:
        """
        Parse one line into a field mapping.

        Raises:
            ParseError: If the line does not fit the bound layout
        """
        pass

    @abstractmethod
    def info(self) -> str:
        """Describe the bound layout for logging."""
        pass

    @abstractmethod
    def snapshot(self) -> dict[str, str]:
        """Return an independent copy of the last parsed mapping."""
        pass


class ColumnExtractor(LineParser):
    """
    Column-position parser bound to one Pattern.

    Not safe for concurrent use: the field mapping is a scratch buffer
    overwritten in place by every ``parse`` call.

    Usage:
        extractor = ColumnExtractor(pattern)
        fields = extractor.parse('192.168.1.1 200 1024')
        kept = extractor.snapshot()
    """

    def __init__(self, pattern: Pattern, tokenizer: Optional[Tokenizer] = None):
        """
        Initialize extractor.

        Args:
            pattern: Sorted, valid pattern to bind
            tokenizer: Tokenizer to split lines (default: double-quote tokenizer)

        Raises:
            ConfigurationError: If the pattern is unsorted or invalid
        """
        if not pattern.is_sorted():
            raise ConfigurationError("pattern is not sorted", pattern=pattern.info())
        if not pattern.is_valid():
            raise ConfigurationError("pattern is not valid", pattern=pattern.info())

        self.pattern = pattern
        self.tokenizer = tokenizer or Tokenizer()
        self._required = pattern.max_index() + 1
        self._data: dict[str, str] = {}

    def fits(self, tokens: Sequence[str]) -> bool:
        """Check that a tokenized line has every column the pattern reads."""
        return len(tokens) >= self._required

    def extract(self, tokens: Sequence[str], line: Optional[str] = None) -> dict[str, str]:
        """
        Fill the scratch mapping from an already tokenized line.

        Raises:
            BoundsError: If the line has too few columns
        """
        if not self.fits(tokens):
            raise BoundsError(
                "line has too few columns for the bound pattern",
                line=line,
                required=self._required,
                available=len(tokens),
            )
        return self.pattern.extract(tokens, into=self._data)

    def parse(self, line: str) -> dict[str, str]:
        """
        Tokenize a line and extract the pattern's columns.

        Args:
            line: Raw log line

        Returns:
            The extractor's field mapping, overwritten in place

        Raises:
            TokenizationError: If quoting in the line is malformed
            BoundsError: If the line has too few columns
        """
        tokens = self.tokenizer.tokenize(line)
        return self.extract(tokens, line=line)

    @property
    def fields(self) -> dict[str, str]:
        """The scratch mapping holding the last result."""
        return self._data

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the last parsed mapping."""
        return dict(self._data)

    def info(self) -> str:
        return self.pattern.info()

    def __repr__(self) -> str:
        return f"ColumnExtractor({self.info()})"
