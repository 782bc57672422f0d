"""
Custom exceptions for the web-log parser.

Provides specialized exception classes for configuration problems,
format detection failures, and per-line parse and validation errors.
"""

from typing import Optional


class WeblogParserError(Exception):
    """
    Base exception for all parser-related errors.

    All other parser exceptions inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class ConfigurationError(WeblogParserError):
    """
    Raised when a supplied pattern or setting is malformed.

    Configuration is presumed fixed, so this error is never retried
    and stops detection before any line is processed.

    Attributes:
        pattern: Diagnostic string of the offending pattern (optional)
        message: Detailed error message
    """

    def __init__(self, message: str, pattern: Optional[str] = None):
        self.pattern = pattern
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with pattern context."""
        if self.pattern:
            return f"{self.message} (pattern={self.pattern})"
        return self.message


class EmptyInputError(WeblogParserError):
    """Raised when the sample line handed to detection is empty."""

    def __init__(self, message: str = "empty line"):
        self.message = message
        super().__init__(message)


class NoMatchError(WeblogParserError):
    """
    Raised when no candidate pattern fits and validates the sample line.

    Attributes:
        attempts: Per-candidate results collected during detection
        message: Detailed error message
    """

    def __init__(self, message: str, attempts: Optional[list] = None):
        self.attempts = attempts or []
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with a summary of the tried candidates."""
        if not self.attempts:
            return self.message
        reasons = "; ".join(
            f"{attempt.pattern.info()}: {attempt.reason}" for attempt in self.attempts
        )
        return f"{self.message} (tried {len(self.attempts)}: {reasons})"


class ParseError(WeblogParserError):
    """
    Raised when a single log line cannot be parsed.

    After an extractor is bound this is a per-line failure: the caller
    reports it and keeps feeding lines.

    Attributes:
        line: The content of the problematic line (optional)
        message: Detailed error message
    """

    def __init__(self, message: str, line: Optional[str] = None):
        self.line = line
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with line context."""
        if self.line:
            # Truncate long lines for readability
            content = self.line[:100] + "..." if len(self.line) > 100 else self.line
            return f"{self.message} (line: {content!r})"
        return self.message


class TokenizationError(ParseError):
    """Raised when a line has malformed or unterminated quoting."""

    pass


class BoundsError(ParseError):
    """
    Raised when a pattern needs more columns than the line has.

    Attributes:
        required: Number of columns the pattern needs
        available: Number of tokens the line produced
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        required: Optional[int] = None,
        available: Optional[int] = None,
    ):
        self.required = required
        self.available = available
        super().__init__(message, line=line)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.required is not None and self.available is not None:
            return f"{base} [required={self.required}, available={self.available}]"
        return base


class ValidationError(WeblogParserError):
    """
    Raised when an extracted mapping fails field validation.

    Used for per-key syntax violations, unknown keys, and the
    missing mandatory 'code' key.

    Attributes:
        field: The field name that failed validation (optional)
        value: The invalid value (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[object] = None,
    ):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with field and value context."""
        if self.field and self.value is not None:
            return f"{self.message} (field='{self.field}', value={self.value!r})"
        elif self.field:
            return f"{self.message} (field='{self.field}')"
        return self.message
