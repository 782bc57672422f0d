"""
Unit tests for the built-in pattern catalog.
"""

import pytest

from weblog_parser import DEFAULT_PATTERNS, describe_patterns, detect_parser, get_default_patterns

from tests.unit.conftest import COMBINED_LINE, COMMON_LINE, NGINX_TIMED_LINE, VHOST_TIMED_LINE


class TestDefaultPatterns:
    """Tests for catalog structure."""

    def test_count(self):
        assert len(DEFAULT_PATTERNS) == 4

    def test_all_sorted_and_valid(self):
        for pattern in DEFAULT_PATTERNS:
            assert pattern.is_sorted(), pattern.info()
            assert pattern.is_valid(), pattern.info()

    def test_every_pattern_has_code(self):
        assert all("code" in p.keys for p in DEFAULT_PATTERNS)

    def test_vhost_layouts_first(self):
        assert [p.keys[0] for p in DEFAULT_PATTERNS] == ["vhost"] * 2 + ["address"] * 2

    def test_longest_first_within_group(self):
        lengths = [len(p) for p in DEFAULT_PATTERNS]
        assert lengths[:2] == sorted(lengths[:2], reverse=True)
        assert lengths[2:] == sorted(lengths[2:], reverse=True)

    def test_get_default_patterns_returns_copy(self):
        patterns = get_default_patterns()
        patterns.clear()
        assert len(get_default_patterns()) == 4

    def test_describe_patterns(self):
        infos = describe_patterns()
        assert infos[-1] == "[address:0, request:5, code:6, bytes_sent:7]"


class TestCatalogDetection:
    """Tests for detecting common server layouts."""

    def test_nginx_with_timings(self):
        extractor = detect_parser(NGINX_TIMED_LINE, DEFAULT_PATTERNS)
        assert extractor.info() == (
            "[address:0, request:5, code:6, bytes_sent:7, response_length:8, "
            "response_time:9, response_time_upstream:10]"
        )
        assert extractor.fields["response_time_upstream"] == "0.010"

    def test_vhost_with_timings(self):
        extractor = detect_parser(VHOST_TIMED_LINE, DEFAULT_PATTERNS)
        assert extractor.info() == (
            "[vhost:0, address:1, request:6, code:7, bytes_sent:8, response_length:9, "
            "response_time:10, response_time_upstream:11]"
        )
        assert extractor.fields["vhost"] == "example.com"
        assert extractor.fields["request"] == "POST /api HTTP/2.0"

    def test_common_log_format(self):
        extractor = detect_parser(COMMON_LINE, DEFAULT_PATTERNS)
        assert extractor.info() == "[address:0, request:5, code:6, bytes_sent:7]"
        assert extractor.fields["bytes_sent"] == "2326"

    def test_combined_log_format(self):
        """Referer and user agent columns are not mapped."""
        extractor = detect_parser(COMBINED_LINE, DEFAULT_PATTERNS)
        assert extractor.info() == "[address:0, request:5, code:6, bytes_sent:7]"

    @pytest.mark.parametrize(
        "tail",
        ['"-" "Mozilla/5.0 (X11)"', '"-" "-"'],
        ids=["dash-referer", "dash-referer-and-agent"],
    )
    def test_combined_log_format_with_dash_referer(self, tail):
        """Dash referer and user agent never bind as timing columns."""
        line = (
            '127.0.0.1 - - [10/Oct/2000:13:55:36 -0700] "GET / HTTP/1.1" 200 2326 '
            + tail
        )
        extractor = detect_parser(line, DEFAULT_PATTERNS)
        assert extractor.info() == "[address:0, request:5, code:6, bytes_sent:7]"
        assert "response_length" not in extractor.fields
