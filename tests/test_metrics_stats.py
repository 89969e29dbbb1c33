"""Tests for the body-metric summary."""

from datetime import datetime, timezone

import pytest

from coachhub.models.user import UserMetric
from coachhub.services.metrics import bmi, compute_metrics_stats, one_month_before


def _metric(day: datetime, weight=None, height=None) -> UserMetric:
    return UserMetric(date_recorded=day, weight_kg=weight, height_cm=height)


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestOneMonthBefore:
    def test_same_day_previous_month(self):
        assert one_month_before(_utc(2026, 5, 15, 9)) == _utc(2026, 4, 15, 9)

    def test_clamps_to_month_end(self):
        assert one_month_before(_utc(2024, 3, 31)) == _utc(2024, 2, 29)

    def test_wraps_year(self):
        assert one_month_before(_utc(2026, 1, 10)) == _utc(2025, 12, 10)


def test_bmi_rounds_to_one_decimal():
    assert bmi(80, 180) == 24.7
    assert bmi(None, 180) is None
    assert bmi(80, None) is None


def test_empty_history():
    stats = compute_metrics_stats([])
    assert stats.current_weight is None
    assert stats.weight_change_this_month == 0
    assert stats.bmi is None
    assert stats.total_entries == 0
    assert stats.first_entry_date is None


def test_change_uses_newest_entry_at_least_a_month_old_with_weight():
    now = _utc(2026, 3, 31, 12)
    metrics = [
        _metric(_utc(2026, 3, 30), weight=80, height=180),
        _metric(_utc(2026, 3, 1), weight=82),
        _metric(_utc(2026, 2, 27), height=181),
        _metric(_utc(2026, 2, 20), weight=85),
        _metric(_utc(2026, 1, 10), weight=90),
    ]
    stats = compute_metrics_stats(metrics, now=now)
    assert stats.current_weight == 80
    assert stats.current_height == 180
    assert stats.weight_change_this_month == pytest.approx(-5)
    assert stats.bmi == 24.7
    assert stats.total_entries == 5
    assert stats.first_entry_date == _utc(2026, 1, 10)


def test_no_change_without_month_old_entry():
    now = _utc(2026, 3, 31)
    metrics = [_metric(_utc(2026, 3, 20), weight=80), _metric(_utc(2026, 3, 5), weight=81)]
    assert compute_metrics_stats(metrics, now=now).weight_change_this_month == 0


def test_naive_dates_are_treated_as_utc():
    now = _utc(2026, 3, 31)
    metrics = [_metric(datetime(2026, 3, 30), weight=70), _metric(datetime(2026, 2, 1), weight=72)]
    assert compute_metrics_stats(metrics, now=now).weight_change_this_month == pytest.approx(-2)
