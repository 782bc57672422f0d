"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from weblog_parser import Pattern, Tokenizer, clear_settings_cache

# Sample access-log lines
NGINX_TIMED_LINE = (
    '192.168.1.10 - - [10/Oct/2023:13:55:36 +0000] "GET /index.html HTTP/1.1" '
    "200 512 310 0.012 0.010"
)
VHOST_TIMED_LINE = (
    'example.com 192.168.1.10 - - [10/Oct/2023:13:55:36 +0000] "POST /api HTTP/2.0" '
    "201 128 64 0.5 0.4"
)
COMMON_LINE = (
    '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326'
)
COMBINED_LINE = (
    '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" '
    '200 2326 "http://example.com/start.html" "Mozilla/4.08 [en] (Win98; I ;Nav)"'
)


class CountingTokenizer(Tokenizer):
    """Tokenizer that records how many lines it was asked to split."""

    def __init__(self, quotes: str = '"'):
        super().__init__(quotes)
        self.calls = 0

    def tokenize(self, line: str) -> list[str]:
        self.calls += 1
        return super().tokenize(line)


@pytest.fixture
def simple_pattern():
    """Address, status code and bytes sent in the first three columns."""
    return Pattern([("address", 0), ("code", 1), ("bytes_sent", 2)])


@pytest.fixture
def counting_tokenizer():
    """Tokenizer that counts tokenize() calls."""
    return CountingTokenizer()


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Keep cached settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()
