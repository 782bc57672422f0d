"""
Built-in candidate patterns for common access-log layouts.

Column positions assume the bracketed timestamp splits into two tokens:

    NGINX:  $remote_addr - $remote_user [$time_local] "$request" $status
            $body_bytes_sent $request_length $request_time $upstream_response_time
    APACHE: %h %l %u %t "%r" %>s %O %I %D

    0: address  1: ident  2: user  3: [time  4: zone]  5: request  6: code
    7: bytes_sent  8: response_length  9: response_time  10: response_time_upstream

Virtual-host layouts ($host / %v first) shift every column by one.
Patterns are ordered longest-first so richer layouts are tried before
their prefixes.
"""

from .pattern import Pattern
from .schema import FieldKey

# Trailing columns after the status code, longest layout first. There are no
# partial timing layouts: in a combined log the '-' referer and user agent
# would pass as response_length and response_time.
_TAILS = (
    (
        FieldKey.BYTES_SENT,
        FieldKey.RESPONSE_LENGTH,
        FieldKey.RESPONSE_TIME,
        FieldKey.RESPONSE_TIME_UPSTREAM,
    ),
    (FieldKey.BYTES_SENT,),
)


def _build(vhost: bool) -> list[Pattern]:
    shift = 1 if vhost else 0
    patterns = []
    for tail in _TAILS:
        fields = []
        if vhost:
            fields.append((FieldKey.VHOST, 0))
        fields.append((FieldKey.ADDRESS, 0 + shift))
        fields.append((FieldKey.REQUEST, 5 + shift))
        fields.append((FieldKey.CODE, 6 + shift))
        fields.extend((key, 7 + shift + offset) for offset, key in enumerate(tail))
        patterns.append(Pattern(fields))
    return patterns


# Virtual-host layouts first: on a plain line their address column lands on
# the '-' ident and fails, while a plain layout would accept a hex-only host
# name such as 'cafe.be' as an address.
DEFAULT_PATTERNS: tuple[Pattern, ...] = tuple(_build(vhost=True) + _build(vhost=False))


def get_default_patterns() -> list[Pattern]:
    """Return the built-in candidate patterns in detection order."""
    return list(DEFAULT_PATTERNS)


def describe_patterns(patterns=DEFAULT_PATTERNS) -> list[str]:
    """Return the diagnostic string of each pattern."""
    return [pattern.info() for pattern in patterns]
