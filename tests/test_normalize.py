"""
Tests for count / whitespace normalization
"""
import pytest

from processing import collapse_whitespace, parse_count


class TestParseCount:
    """计数文本解析"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1,234", 1234),
            ("1.2k", 1200),
            ("300", 300),
            ("  42  ", 42),
            ("12,345,678", 12345678),
            ("0.5k", 500),
        ],
    )
    def test_numeric_forms(self, text, expected):
        assert parse_count(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", None, "abc", "k", "stars today"])
    def test_unparsable_is_zero(self, text):
        assert parse_count(text) == 0

    def test_tolerates_decorative_text_around_number(self):
        assert parse_count("<svg>...</svg> 1.2k") == 1200
        assert parse_count("Stars: 987 total") == 987

    def test_only_lowercase_k_multiplies(self):
        assert parse_count("1.5K") == 1

    @pytest.mark.parametrize(
        "text, expected",
        [("3 weeks", 3), ("1,001 stars this week", 1001), ("2 k", 2000), ("1.2k\n  ", 1200)],
    )
    def test_only_trailing_k_multiplies(self, text, expected):
        assert parse_count(text) == expected

    def test_never_negative(self):
        assert parse_count("-15") == 15


def test_collapse_whitespace():
    assert collapse_whitespace("  A mock \n\t repository  ") == "A mock repository"
    assert collapse_whitespace(None) == ""
