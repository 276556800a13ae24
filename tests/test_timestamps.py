"""
Tests for filename timestamp parsing and formatting.
"""

import pytest

from shotsub.timestamps import match_timestamps, format_timestamp, parse_timestamp
from shotsub.models import ImageTask


class TestMatchTimestamps:
    """Test extraction of the two time groups from a filename stem."""

    def test_basic(self):
        assert match_timestamps("0_00_12_468__0_00_14_101") == ("0_00_12_468", "0_00_14_101")

    def test_trailing_text_is_ignored(self):
        assert match_timestamps("1_02_03_004__1_02_05_000_frame7") == ("1_02_03_004", "1_02_05_000")

    def test_multi_digit_fields(self):
        assert match_timestamps("12_59_59_999__13_00_00_000") == ("12_59_59_999", "13_00_00_000")

    @pytest.mark.parametrize("stem", [
        "screenshot",
        "0_00_12_468",
        "0_00_12_468_0_00_14_101",
        "0_00_12__0_00_14_101",
        "x0_00_12_468__0_00_14_101",
        "0_00_ab_468__0_00_14_101",
        "",
    ])
    def test_rejects_non_matching(self, stem):
        assert match_timestamps(stem) is None


class TestFormatTimestamp:
    """Test HH:MM:SS,mmm formatting of raw groups."""

    def test_example(self):
        assert format_timestamp("0_00_12_468") == "00:00:12,468"

    def test_padding(self):
        assert format_timestamp("1_2_3_4") == "01:02:03,004"

    def test_hours_above_99(self):
        assert format_timestamp("123_00_00_000") == "123:00:00,000"

    def test_wrong_field_count_defaults_to_zero(self):
        assert format_timestamp("0_00_12") == "00:00:00,000"
        assert format_timestamp("") == "00:00:00,000"

    def test_empty_fields_are_dropped(self):
        assert format_timestamp("1__2_3_4") == "01:02:03,004"
        assert format_timestamp("_0_00_12_468_") == "00:00:12,468"
        assert parse_timestamp("1__2_3_4") == pytest.approx(3723.004)

    def test_bad_field_counts_as_zero(self):
        assert format_timestamp("1_xx_03_400") == "01:00:03,400"


class TestParseTimestamp:
    """Test conversion of raw groups to seconds."""

    def test_example(self):
        assert parse_timestamp("0_00_12_468") == pytest.approx(12.468)

    def test_all_fields(self):
        assert parse_timestamp("1_01_01_500") == pytest.approx(3661.5)

    def test_invalid(self):
        assert parse_timestamp("0_00_12") is None
        assert parse_timestamp("0_00_xx_468") is None

    def test_orders_like_time_not_like_text(self):
        assert parse_timestamp("0_00_09_999") < parse_timestamp("0_00_10_000")


class TestImageTask:
    """Test building tasks from paths."""

    def test_from_path(self):
        task = ImageTask.from_path("/shots/0_00_12_468__0_00_14_101.png")
        assert task.start == "0_00_12_468"
        assert task.end == "0_00_14_101"
        assert task.filename == "0_00_12_468__0_00_14_101.png"
        assert task.start_seconds == pytest.approx(12.468)

    def test_extension_is_not_part_of_the_match(self):
        task = ImageTask.from_path("0_00_01_000__0_00_02_000.jpeg")
        assert task.end == "0_00_02_000"

    def test_from_path_rejects_bad_name(self):
        assert ImageTask.from_path("/shots/holiday.png") is None
