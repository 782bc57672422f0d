"""
Whitespace tokenizer for access-log lines.

Uses shlex for splitting space-separated fields with quoted strings,
the same way access logs with a quoted request line are read.
"""

import shlex

from .exceptions import TokenizationError

DEFAULT_QUOTES = '"'


class Tokenizer:
    """
    Split a log line into whitespace-delimited tokens.

    A pair of matching quote characters delimits one token: its internal
    whitespace is kept and the quotes are stripped. A quoted token must
    begin and end at whitespace or the line edges. Backslash escapes and
    comment characters carry no special meaning.

    The tokenizer holds only its quoting configuration, so a single
    instance can be reused for every line of a log source.

    Usage:
        tokenizer = Tokenizer()
        tokenizer.tokenize('1.2.3.4 "GET / HTTP/1.1" 200')
        # ['1.2.3.4', 'GET / HTTP/1.1', '200']
    """

    def __init__(self, quotes: str = DEFAULT_QUOTES):
        """
        Initialize tokenizer.

        Args:
            quotes: Characters accepted as token delimiters (default: '"')
        """
        if not quotes:
            raise ValueError("at least one quote character is required")
        self.quotes = quotes

    def tokenize(self, line: str) -> list[str]:
        """
        Tokenize one line.

        Args:
            line: Raw log line (no trailing-newline assumption)

        Returns:
            List of tokens, possibly empty for a blank line

        Raises:
            TokenizationError: If quoting is unterminated, a quote opens
                               inside a token, or a closing quote is not
                               followed by whitespace
        """
        lexer = shlex.shlex(line, posix=True)
        lexer.whitespace_split = True
        lexer.commenters = ""
        lexer.escape = ""
        lexer.quotes = self.quotes

        self._check_quote_boundaries(line, lexer.whitespace)

        try:
            return list(lexer)
        except ValueError as e:
            raise TokenizationError(f"Malformed quoting: {e}", line=line) from e

    def _check_quote_boundaries(self, line: str, whitespace: str) -> None:
        """Reject quotes that shlex would silently merge into a neighbour."""
        quote = None
        token_start = True
        after_close = False

        for position, char in enumerate(line):
            if quote is not None:
                if char == quote:
                    quote = None
                    after_close = True
                continue

            if char in whitespace:
                token_start = True
                after_close = False
                continue

            if after_close:
                raise TokenizationError(
                    f"Malformed quoting: {char!r} after closing quote at column {position}",
                    line=line,
                )
            if char in self.quotes:
                if not token_start:
                    raise TokenizationError(
                        f"Malformed quoting: quote inside unquoted token at column {position}",
                        line=line,
                    )
                quote = char
            token_start = False

    def __repr__(self) -> str:
        return f"Tokenizer(quotes={self.quotes!r})"
