"""Unit tests for duration string parsing."""

from datetime import timedelta

import pytest

from serveis_auth import DEFAULT_DURATION_MS, duration_to_timedelta, parse_duration


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("30s", 30_000),
            ("15m", 900_000),
            ("2h", 7_200_000),
            ("7d", 604_800_000),
            ("0s", 0),
        ],
    )
    def test_valid_units(self, value, expected):
        """Each supported unit converts to milliseconds."""
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "15", "m15", "1w", "1.5h", " 15m", "15M"])
    def test_invalid_strings_fall_back_to_default(self, value):
        """Anything outside <int><s|m|h|d> resolves to 15 minutes."""
        assert parse_duration(value) == DEFAULT_DURATION_MS

    @pytest.mark.parametrize("value", ["٣٠s", "١٥m", "７d"])
    def test_non_ascii_digits_fall_back_to_default(self, value):
        """Only ASCII digits count; Arabic-Indic or fullwidth digits do not."""
        assert parse_duration(value) == DEFAULT_DURATION_MS

    def test_non_string_falls_back_to_default(self):
        """Non-string input does not raise."""
        assert parse_duration(None) == DEFAULT_DURATION_MS  # type: ignore[arg-type]

    def test_default_is_fifteen_minutes(self):
        assert DEFAULT_DURATION_MS == 15 * 60 * 1000


class TestDurationToTimedelta:
    def test_converts_to_timedelta(self):
        """Durations become timedeltas of the same length."""
        assert duration_to_timedelta("7d") == timedelta(days=7)
        assert duration_to_timedelta("bogus") == timedelta(minutes=15)
