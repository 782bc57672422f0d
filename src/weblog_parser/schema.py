"""
Field keys and syntax rules for access-log fields.

Defines the fixed set of semantic fields a pattern may extract, along
with the compiled regular expressions used to check their raw values.
"""

import re
from enum import Enum
from typing import Optional, Union


class FieldKey(str, Enum):
    """Recognised semantic fields of an access-log line."""

    CODE = "code"
    VHOST = "vhost"
    ADDRESS = "address"
    BYTES_SENT = "bytes_sent"
    RESPONSE_LENGTH = "response_length"
    RESPONSE_TIME = "response_time"
    RESPONSE_TIME_UPSTREAM = "response_time_upstream"
    REQUEST = "request"
    METHOD = "method"
    URL = "url"
    VERSION = "version"
    USER_DEFINED = "user_defined"


FIELD_KEYS = frozenset(key.value for key in FieldKey)

# Composite request sub-fields, in column order
REQUEST_SUBFIELDS = (FieldKey.METHOD, FieldKey.URL, FieldKey.VERSION)


# =============================================================================
# Syntax Rules
# =============================================================================

# TODO: confirm vhost syntax against real server configs (uppercase, IDN hosts)
RE_VHOST = re.compile(r"[\da-z.:-]+")
RE_ADDRESS = re.compile(r"[\da-fA-F.:]+|localhost")
RE_CODE = re.compile(r"[1-9]\d{2}")
RE_BYTES_SENT = re.compile(r"\d+|-")
RE_RESPONSE_LENGTH = re.compile(r"\d+|-")
RE_RESPONSE_TIME = re.compile(r"\d+|\d+\.\d+|-")
RE_HTTP_METHOD = re.compile(r"[A-Z]+")
RE_HTTP_VERSION = re.compile(r"HTTP/[0-9.]+")

# Methods accepted in the request line: RFC 9110, PATCH, and WebDAV
HTTP_METHODS = frozenset(
    {
        "GET",
        "HEAD",
        "POST",
        "PUT",
        "DELETE",
        "CONNECT",
        "OPTIONS",
        "TRACE",
        "PATCH",
        "PROPFIND",
        "PROPPATCH",
        "MKCOL",
        "COPY",
        "MOVE",
        "LOCK",
        "UNLOCK",
        "SEARCH",
        "REPORT",
    }
)

# Keys whose value is checked by a single full-match regex.
# Keys mapped to None are extracted but not constrained.
FIELD_SYNTAX: dict[str, Optional[re.Pattern]] = {
    FieldKey.VHOST.value: RE_VHOST,
    FieldKey.ADDRESS.value: RE_ADDRESS,
    FieldKey.CODE.value: RE_CODE,
    FieldKey.BYTES_SENT.value: RE_BYTES_SENT,
    FieldKey.RESPONSE_LENGTH.value: RE_RESPONSE_LENGTH,
    FieldKey.RESPONSE_TIME.value: RE_RESPONSE_TIME,
    FieldKey.RESPONSE_TIME_UPSTREAM.value: RE_RESPONSE_TIME,
    FieldKey.VERSION.value: RE_HTTP_VERSION,
    FieldKey.URL.value: None,
    FieldKey.USER_DEFINED.value: None,
}


def key_name(key: Union[FieldKey, str]) -> str:
    """Return the plain string name of a field key."""
    if isinstance(key, FieldKey):
        return key.value
    return str(key)


def is_known_key(key: Union[FieldKey, str]) -> bool:
    """Check whether a key is one of the recognised field keys."""
    return key_name(key) in FIELD_KEYS


def is_valid_method(value: str) -> bool:
    """Check an HTTP method: uppercase letters naming a known method."""
    return bool(RE_HTTP_METHOD.fullmatch(value)) and value in HTTP_METHODS
