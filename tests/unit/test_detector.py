"""
Unit tests for access-log format detection.

Tests candidate ordering, skip reasons, configuration checks, and the
extractor bound by a successful detection.
"""

import logging

import pytest

from weblog_parser import (
    CandidateOutcome,
    ColumnExtractor,
    ConfigurationError,
    EmptyInputError,
    FormatDetector,
    NoMatchError,
    Pattern,
    check_pattern,
    detect_parser,
)


class TestDetectParser:
    """Tests for the detect_parser entry point."""

    def test_binds_matching_pattern(self, simple_pattern):
        extractor = detect_parser("192.168.1.1 200 1024", [simple_pattern])
        assert isinstance(extractor, ColumnExtractor)
        assert extractor.info() == "[address:0, code:1, bytes_sent:2]"

    def test_sample_line_prefilled(self, simple_pattern):
        """The sample line is the bound extractor's first result."""
        extractor = detect_parser("192.168.1.1 200 1024", [simple_pattern])
        assert extractor.fields == {
            "address": "192.168.1.1",
            "code": "200",
            "bytes_sent": "1024",
        }

    def test_bound_extractor_parses_later_lines(self, simple_pattern):
        extractor = detect_parser("192.168.1.1 200 1024", [simple_pattern])
        assert extractor.parse("10.0.0.7 404 0")["code"] == "404"

    def test_parse_is_repeatable(self, simple_pattern):
        extractor = detect_parser("192.168.1.1 200 1024", [simple_pattern])
        first = extractor.snapshot()
        extractor.parse("192.168.1.1 200 1024")
        assert extractor.snapshot() == first

    def test_invalid_value_means_no_match(self, simple_pattern):
        """A sample that fails validation is never bound."""
        with pytest.raises(NoMatchError) as exc_info:
            detect_parser("192.168.1.1 99 1024", [simple_pattern])
        attempts = exc_info.value.attempts
        assert len(attempts) == 1
        assert attempts[0].outcome is CandidateOutcome.SKIP
        assert "'code'" in attempts[0].reason

    def test_first_matching_candidate_wins(self):
        p1 = Pattern([("address", 0), ("code", 2)])
        p2 = Pattern([("address", 0), ("code", 1)])
        extractor = detect_parser("10.0.0.1 200 abc", [p1, p2])
        assert extractor.pattern == p2

    def test_earlier_candidate_preferred(self):
        """When several candidates validate, the earliest is bound."""
        short = Pattern([("address", 0), ("code", 1)])
        long = Pattern([("address", 0), ("code", 1), ("bytes_sent", 2)])
        assert detect_parser("10.0.0.1 200 5", [long, short]).pattern == long
        assert detect_parser("10.0.0.1 200 5", [short, long]).pattern == short

    def test_empty_line(self, simple_pattern):
        with pytest.raises(EmptyInputError, match="empty line"):
            detect_parser("", [simple_pattern])

    def test_whitespace_line(self, simple_pattern):
        with pytest.raises(EmptyInputError):
            detect_parser("   \t", [simple_pattern])

    def test_no_candidates(self):
        with pytest.raises(NoMatchError) as exc_info:
            detect_parser("10.0.0.1 200 5", [])
        assert exc_info.value.attempts == []
        assert str(exc_info.value) == "can't find appropriate parser"


class TestFormatDetector:
    """Tests for FormatDetector diagnostics and configuration checks."""

    def test_unsorted_pattern_rejected_before_tokenizing(
        self, simple_pattern, counting_tokenizer
    ):
        bad = Pattern([("code", 1), ("address", 0)])
        detector = FormatDetector([simple_pattern, bad], tokenizer=counting_tokenizer)
        with pytest.raises(ConfigurationError, match="not sorted"):
            detector.detect("192.168.1.1 200 1024")
        assert counting_tokenizer.calls == 0

    def test_invalid_pattern_rejected(self, counting_tokenizer):
        bad = Pattern([("code", 0), ("code", 1)])
        detector = FormatDetector([bad], tokenizer=counting_tokenizer)
        with pytest.raises(ConfigurationError, match="not valid"):
            detector.detect("200 200")
        assert counting_tokenizer.calls == 0

    def test_line_tokenized_once(self, counting_tokenizer):
        """All candidates share one tokenization of the sample line."""
        patterns = [
            Pattern([("address", 0), ("code", 5)]),
            Pattern([("address", 0), ("code", 2)]),
            Pattern([("address", 0), ("code", 1)]),
        ]
        detector = FormatDetector(patterns, tokenizer=counting_tokenizer)
        detector.detect("10.0.0.1 200 abc")
        assert counting_tokenizer.calls == 1

    def test_short_line_skips_candidate(self):
        detector = FormatDetector(
            [Pattern([("address", 0), ("code", 5)]), Pattern([("code", 1)])]
        )
        detector.detect("10.0.0.1 200")
        first, second = detector.attempts
        assert first.outcome is CandidateOutcome.SKIP
        assert first.reason == "needs 6 columns, line has 2"
        assert second.outcome is CandidateOutcome.BIND

    def test_bad_quoting_skips_every_candidate(self, simple_pattern):
        detector = FormatDetector([simple_pattern, Pattern([("code", 0)])])
        with pytest.raises(NoMatchError) as exc_info:
            detector.detect('10.0.0.1 "200 5')
        assert len(exc_info.value.attempts) == 2
        assert all("Malformed quoting" in a.reason for a in exc_info.value.attempts)

    def test_quote_inside_token_skips_candidate(self, simple_pattern):
        """A stray quote is not merged into a neighbouring column."""
        with pytest.raises(NoMatchError, match="quote inside unquoted token"):
            detect_parser('10.0.0.1 2"00 1"024', [simple_pattern])

    def test_unknown_key_skips_candidate(self):
        detector = FormatDetector([Pattern([("referer", 0), ("code", 1)])])
        with pytest.raises(NoMatchError, match="unknown key 'referer'"):
            detector.detect("- 200")

    def test_missing_code_skips_candidate(self):
        detector = FormatDetector([Pattern([("address", 0)])])
        with pytest.raises(NoMatchError, match="mandatory key 'code'"):
            detector.detect("10.0.0.1")

    def test_attempts_reset_per_detection(self, simple_pattern):
        detector = FormatDetector([simple_pattern])
        with pytest.raises(NoMatchError):
            detector.detect("x y")
        detector.detect("10.0.0.1 200 5")
        assert len(detector.attempts) == 1

    def test_logs_detected_format(self, simple_pattern, caplog):
        with caplog.at_level(logging.INFO, logger="weblog_parser.detector"):
            detect_parser("192.168.1.1 200 1024", [simple_pattern])
        assert "Detected log format: [address:0, code:1, bytes_sent:2]" in caplog.text

    def test_check_pattern(self, simple_pattern):
        check_pattern(simple_pattern)
        with pytest.raises(ConfigurationError):
            check_pattern(Pattern([]))
