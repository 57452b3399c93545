"""Tests for the statistics aggregator."""

import pytest

from exacodis.core.record import TestRecord
from exacodis.core.stats import (
    Stats,
    compute_stats,
    format_percent,
    ms_to_hms,
    percentages,
)


def make_record(*judgments: bool) -> TestRecord:
    record = TestRecord(lambda: None)
    for passed in judgments:
        record.add_assert_result(passed)
    return record


class TestMsToHms:
    """Tests for the HH:MM:SS conversion."""

    @pytest.mark.parametrize(
        "milliseconds,expected",
        [
            (0, "00:00:00"),
            (999, "00:00:00"),
            (59000, "00:00:59"),
            (60000, "00:01:00"),
            (3661000, "01:01:01"),
            (3599999, "00:59:59"),
        ],
    )
    def test_conversion(self, milliseconds, expected):
        """Test known conversions."""
        assert ms_to_hms(milliseconds) == expected

    def test_no_day_rollover(self):
        """Test that hours keep growing past a day."""
        assert ms_to_hms(100 * 3600 * 1000) == "100:00:00"


class TestPercentages:
    """Tests for percentage computation."""

    def test_zero_total(self):
        """Test that an empty total gives zero percentages."""
        assert percentages(0, 0) == (0, 0)

    def test_all_passed(self):
        """Test a full pass."""
        assert percentages(3, 3) == (100.0, 0.0)

    def test_rounding(self):
        """Test that the passed share is rounded to two decimals."""
        passed, failed = percentages(1, 3)
        assert passed == 33.33
        assert failed == 100 - passed

    def test_complementarity(self):
        """Test that the failed share derives from the rounded passed share."""
        for total in range(1, 30):
            for passed_count in range(total + 1):
                passed, failed = percentages(passed_count, total)
                assert failed == 100 - passed

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (100.0, "100"),
            (33.33, "33.33"),
            (12.5, "12.5"),
            (100 - 14.29, "85.71"),
        ],
    )
    def test_format_percent(self, value, expected):
        """Test formatting percentages for display."""
        assert format_percent(value) == expected


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty(self):
        """Test a snapshot with no runs and no assertions."""
        stats = compute_stats([], 0, 0, 0)

        assert stats == Stats()
        assert stats.nb_runs == 0
        assert stats.passed_runs_percent == 0
        assert stats.failed_runs_percent == 0
        assert stats.passed_assertions_percent == 0
        assert stats.failed_assertions_percent == 0
        assert stats.hms == "00:00:00"

    def test_counts(self):
        """Test run and assertion counts."""
        records = [make_record(True, True), make_record(True, False), make_record()]

        stats = compute_stats(records, passed_assertions=3, failed_assertions=1, milliseconds=61000)

        assert stats.nb_runs == 3
        assert stats.passed_runs == 1
        assert stats.failed_runs == 2
        assert stats.passed_runs_percent == 33.33
        assert stats.failed_runs_percent == 100 - 33.33
        assert stats.nb_assertions == 4
        assert stats.passed_assertions_percent == 75.0
        assert stats.failed_assertions_percent == 25.0
        assert stats.milliseconds == 61000
        assert stats.hms == "00:01:01"
        assert not stats.all_passed

    def test_to_dict_keys(self):
        """Test the dictionary layout of a snapshot."""
        d = compute_stats([make_record(True)], 1, 0, 0).to_dict()

        assert d == {
            "nb_runs": 1,
            "passed_runs": 1,
            "failed_runs": 0,
            "passed_runs_percent": 100.0,
            "failed_runs_percent": 0.0,
            "nb_assertions": 1,
            "passed_assertions": 1,
            "failed_assertions": 0,
            "passed_assertions_percent": 100.0,
            "failed_assertions_percent": 0.0,
            "milliseconds": 0,
            "hms": "00:00:00",
        }
