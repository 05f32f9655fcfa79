"""
Тесты форматирования метрик и пагинации
"""
import pytest

from app.utils.helpers import (
    format_hash,
    format_number,
    format_bytes,
    humanize_time_ago,
    format_date,
    format_hashrate,
    format_difficulty,
    parse_page,
    calculate_total_pages,
    calculate_start_height,
)


class TestFormatHash:
    """Тесты сокращения хэшей"""

    def test_short_values_unchanged(self):
        assert format_hash("abc") == "abc"
        assert format_hash("a" * 16) == "a" * 16

    def test_long_hash(self):
        value = "0123456789abcdef" * 4
        result = format_hash(value)

        assert len(result) == 16 + 3
        assert result == "01234567...89abcdef"

    def test_custom_length(self):
        value = "abcdefghijklmnopqrstuvwxyz"
        assert format_hash(value, length=8) == "abcd...wxyz"

    def test_empty(self):
        assert format_hash("") == ""
        assert format_hash(None) == ""


class TestFormatBytes:
    """Тесты форматирования размеров"""

    def test_zero(self):
        assert format_bytes(0) == "0 B"

    def test_kilobytes(self):
        assert format_bytes(1536) == "1.50 KB"

    def test_units(self):
        assert format_bytes(512) == "512.00 B"
        assert format_bytes(1024 ** 2) == "1.00 MB"
        assert format_bytes(3 * 1024 ** 3) == "3.00 GB"

    def test_larger_than_gb_stays_in_gb(self):
        assert format_bytes(2048 * 1024 ** 3) == "2048.00 GB"


class TestTimeAgo:
    """Тесты относительного времени"""

    @pytest.mark.parametrize("elapsed, expected", [
        (0, "0 seconds ago"),
        (59, "59 seconds ago"),
        (60, "1 minutes ago"),
        (3599, "59 minutes ago"),
        (3600, "1 hours ago"),
        (86399, "23 hours ago"),
        (86400, "1 days ago"),
        (3 * 86400 + 5, "3 days ago"),
    ])
    def test_buckets(self, elapsed, expected):
        now = 1_700_000_000
        assert humanize_time_ago(now - elapsed, now=now) == expected

    def test_uses_current_time(self, current_timestamp):
        assert humanize_time_ago(current_timestamp - 120) in ("2 minutes ago", "3 minutes ago")


class TestScales:
    """Тесты хэшрейта и сложности"""

    def test_hashrate_units(self):
        assert format_hashrate(2.5e18) == "2.50 EH/s"
        assert format_hashrate(1e15) == "1.00 PH/s"
        assert format_hashrate(3.456e12) == "3.46 TH/s"
        assert format_hashrate(7e9) == "7.00 GH/s"
        assert format_hashrate(1.5e6) == "1.50 MH/s"
        assert format_hashrate(1000) == "1.00 KH/s"
        assert format_hashrate(999) == "999.00 H/s"
        assert format_hashrate(0) == "0.00 H/s"

    def test_difficulty_units(self):
        assert format_difficulty(1.2e12) == "1.20T"
        assert format_difficulty(5e9) == "5.00B"
        assert format_difficulty(2.5e6) == "2.50M"
        assert format_difficulty(1234) == "1.23K"
        assert format_difficulty(999.999) == "1000.00"
        assert format_difficulty(0.001) == "0.00"


class TestMisc:
    """Прочие форматтеры"""

    def test_format_number(self):
        assert format_number(None) == "0"
        assert format_number(1234567) == "1,234,567"

    def test_format_date(self):
        assert format_date(0) == "1970-01-01 00:00:00"
        assert format_date(1_700_000_000, "%Y-%m-%d") == "2023-11-14"


class TestPagination:
    """Тесты арифметики пагинации"""

    @pytest.mark.parametrize("raw, default, expected", [
        (None, 1, 1),
        ("2", 1, 2),
        (" 3 ", 0, 3),
        ("0", 1, 1),
        ("-4", 0, 0),
        ("abc", 1, 1),
        ("", 0, 0),
        (5, 0, 5),
    ])
    def test_parse_page(self, raw, default, expected):
        assert parse_page(raw, default) == expected

    def test_total_pages(self):
        assert calculate_total_pages(1001) == 41
        assert calculate_total_pages(25) == 1
        assert calculate_total_pages(26) == 2
        assert calculate_total_pages(0) == 0

    def test_start_height(self):
        assert calculate_start_height(1000, 1) == 1000
        assert calculate_start_height(1000, 2) == 975
