"""
Tests for the croniter-backed oracle.
"""

from datetime import datetime, timezone

from cronjob.oracle import CronOracle


def test_is_valid():
    oracle = CronOracle()

    assert oracle.is_valid('* * * * *')
    assert oracle.is_valid('*/5 0-6 * * 1')
    assert not oracle.is_valid('every day')
    assert not oracle.is_valid('61 * * * *')
    assert not oracle.is_valid(None)


def test_is_due_within_matching_minute():
    oracle = CronOracle()

    assert oracle.is_due('0 12 * * *', datetime(2024, 1, 1, 12, 0, 30, tzinfo=timezone.utc))
    assert not oracle.is_due('0 12 * * *', datetime(2024, 1, 1, 12, 5, tzinfo=timezone.utc))


def test_previous_run_time():
    oracle = CronOracle()
    now = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)
    expected = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    assert oracle.previous_run_time('0 12 * * *', now) == int(expected.timestamp())


def test_previous_run_time_crosses_days():
    oracle = CronOracle()
    now = datetime(2024, 1, 1, 6, 0, tzinfo=timezone.utc)
    expected = datetime(2023, 12, 31, 12, 0, tzinfo=timezone.utc)

    assert oracle.previous_run_time('0 12 * * *', now) == int(expected.timestamp())


def test_naive_datetime_is_local_time():
    oracle = CronOracle()
    naive = datetime(2024, 3, 10, 8, 30)
    expected = datetime(2024, 3, 10, 8, 0)

    assert oracle.previous_run_time('0 * * * *', naive) == int(expected.timestamp())
