"""
Field validation for extracted access-log mappings.

Checks that every extracted value is syntactically sane for its key,
including the composite request field, which is split into method, URL
and protocol version and validated recursively.
"""

from typing import Mapping, Optional

from .exceptions import TokenizationError, ValidationError
from .extractor import REQUEST_PATTERN, ColumnExtractor
from .schema import (
    FIELD_SYNTAX,
    FieldKey,
    REQUEST_SUBFIELDS,
    is_known_key,
    is_valid_method,
)
from .tokenizer import Tokenizer

CODE = FieldKey.CODE.value
REQUEST = FieldKey.REQUEST.value
METHOD = FieldKey.METHOD.value
VERSION = FieldKey.VERSION.value


class FieldValidator:
    """
    All-or-nothing validator for one field mapping.

    Rules:
    - 'code' is mandatory
    - every key must be a recognised field key
    - each value must fully match its key's syntax (after stripping)
    - 'request' must split into exactly method, URL and version

    Each validator owns its own request extractor, so instances share
    no mutable state.

    Usage:
        validator = FieldValidator()
        error = validator.first_violation({"code": "200"})  # None
        validator.validate({"code": "99"})  # raises ValidationError
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        """
        Initialize validator.

        Args:
            tokenizer: Tokenizer used to split the request field
        """
        self.tokenizer = tokenizer or Tokenizer()
        self._request_parser = ColumnExtractor(REQUEST_PATTERN, self.tokenizer)

    def first_violation(self, mapping: Mapping[str, str]) -> Optional[ValidationError]:
        """
        Find the first rule violation in a mapping.

        Args:
            mapping: Field key to raw value

        Returns:
            The first ValidationError found, or None if the mapping is valid
        """
        if CODE not in mapping:
            return ValidationError("mandatory key 'code' is missing", field=CODE)

        for key, value in mapping.items():
            if not is_known_key(key):
                return ValidationError(f"unknown key '{key}'", field=key)

            if key == REQUEST:
                error = self._check_request(value)
            elif key == METHOD:
                error = _check_method(value.strip())
            else:
                error = _check_syntax(key, value)

            if error is not None:
                return error

        return None

    def validate(self, mapping: Mapping[str, str]) -> None:
        """
        Validate a mapping.

        Raises:
            ValidationError: On the first rule violation
        """
        error = self.first_violation(mapping)
        if error is not None:
            raise error

    def is_valid(self, mapping: Mapping[str, str]) -> bool:
        """Check whether a mapping passes every rule."""
        return self.first_violation(mapping) is None

    def parse_request(self, value: str) -> dict[str, str]:
        """
        Split and validate a request line.

        Args:
            value: Request value, bare or wrapped in quotes
                   (e.g. 'GET /index.html HTTP/1.1')

        Returns:
            Dict with 'method', 'url' and 'version'

        Raises:
            ValidationError: If the request is unparsable or a sub-field is invalid
        """
        error = self._check_request(value)
        if error is not None:
            raise error
        return self._request_parser.snapshot()

    def _check_request(self, value: str) -> Optional[ValidationError]:
        """Split the request field and check its method and version."""
        raw = self._unquote(value.strip())

        try:
            tokens = self.tokenizer.tokenize(raw)
        except TokenizationError:
            return ValidationError(f"unparsable '{REQUEST}' field", field=REQUEST, value=value)

        if len(tokens) != len(REQUEST_SUBFIELDS):
            return ValidationError(
                f"'{REQUEST}' field must have {len(REQUEST_SUBFIELDS)} parts, "
                f"got {len(tokens)}",
                field=REQUEST,
                value=value,
            )

        parts = self._request_parser.extract(tokens, line=raw)

        error = _check_method(parts[METHOD])
        if error is not None:
            return error
        return _check_syntax(VERSION, parts[VERSION])

    def _unquote(self, value: str) -> str:
        """Drop one pair of quotes wrapping the whole value."""
        if len(value) >= 2 and value[0] == value[-1] and value[0] in self.tokenizer.quotes:
            return value[1:-1]
        return value


def _check_method(value: str) -> Optional[ValidationError]:
    """Check an HTTP method against the method syntax and known methods."""
    if not is_valid_method(value):
        return ValidationError(f"'{METHOD}' field bad syntax", field=METHOD, value=value)
    return None


def _check_syntax(key: str, value: str) -> Optional[ValidationError]:
    """Full-match a stripped value against its key's regex, if it has one."""
    regex = FIELD_SYNTAX.get(key)
    if regex is None:
        return None
    if not regex.fullmatch(value.strip()):
        return ValidationError(f"'{key}' field bad syntax", field=key, value=value)
    return None


def validate_fields(mapping: Mapping[str, str]) -> None:
    """
    Validate a mapping with a fresh double-quote validator.

    Raises:
        ValidationError: On the first rule violation
    """
    FieldValidator().validate(mapping)
