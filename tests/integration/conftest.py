"""
Pytest configuration and shared fixtures for integration tests.
"""

import pytest

from weblog_parser import clear_settings_cache

# nginx main format extended with request length and timings
NGINX_LINES = [
    '192.168.1.10 - - [10/Oct/2023:13:55:36 +0000] "GET /index.html HTTP/1.1" '
    "200 512 310 0.012 0.010",
    '10.0.0.3 - - [10/Oct/2023:13:55:38 +0000] "HEAD /health HTTP/1.1" '
    "204 0 90 0.001 -",
    "truncated line",
    '10.0.0.2 - - [10/Oct/2023:13:55:37 +0000] "GET / HTTP/1.1" abc 1 1 0.1 0.1',
]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """
    Run each test from an empty directory with no parser env vars, so
    neither a local weblog-parser.yaml nor the environment leaks in.
    """
    for name in (
        "WEBLOG_PARSER_USE_DEFAULT_PATTERNS",
        "WEBLOG_PARSER_CUSTOM_PATTERNS",
        "WEBLOG_PARSER_QUOTE_CHARS",
        "WEBLOG_PARSER_VALIDATE_LINES",
        "WEBLOG_PARSER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def nginx_log(tmp_path):
    """Plain-text nginx access log with one short and one bad-status line."""
    path = tmp_path / "access.log"
    path.write_text("\n".join(NGINX_LINES) + "\n")
    return path
