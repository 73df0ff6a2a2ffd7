"""
Tests for the video analytics display helpers
"""
import pytest

from lionscout.services.formatting import completion_percent, format_view_count, format_watch_time


class TestCompletionPercent:
    def test_partial_view(self):
        assert completion_percent(30, 120) == 25

    def test_rounds_half_up(self):
        assert completion_percent(1, 8) == 13  # 12.5%

    @pytest.mark.parametrize("watch,total", [(120, 120), (500, 120), (120.4, 120)])
    def test_clamped_to_100(self, watch, total):
        assert completion_percent(watch, total) == 100

    @pytest.mark.parametrize("total", [0, None, -5, float("nan")])
    def test_unknown_duration_is_zero(self, total):
        assert completion_percent(30, total) == 0

    def test_negative_watch_is_zero(self):
        assert completion_percent(-10, 100) == 0

    def test_infinite_watch_is_full(self):
        assert completion_percent(float("inf"), 60) == 100

    @pytest.mark.parametrize("watch,total", [
        (float("nan"), 60),
        (30, float("inf")),
        (float("inf"), float("inf")),
        (float("-inf"), 60),
    ])
    def test_non_finite_values_do_not_raise(self, watch, total):
        assert completion_percent(watch, total) == 0


class TestFormatWatchTime:
    @pytest.mark.parametrize("seconds,expected", [
        (0, "0s"),
        (45, "45s"),
        (120, "2m"),
        (125, "2m 5s"),
        (3600, "1h"),
        (3900, "1h 5m"),
        (59.6, "1m"),
        (119.7, "2m"),
        (3599.8, "1h"),
        (None, "0s"),
        (float("nan"), "0s"),
        (float("inf"), "0s"),
    ])
    def test_format(self, seconds, expected):
        assert format_watch_time(seconds) == expected


class TestFormatViewCount:
    @pytest.mark.parametrize("count,expected", [
        (0, "0"),
        (999, "999"),
        (1200, "1.2K"),
        (3400000, "3.4M"),
    ])
    def test_format(self, count, expected):
        assert format_view_count(count) == expected
