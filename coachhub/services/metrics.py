"""Body-metric summary: current weight/height, monthly change and BMI."""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import datetime

from coachhub.core.dates import as_utc, utcnow
from coachhub.models.user import UserMetric
from coachhub.schemas.user import MetricsStatsRead


def one_month_before(moment: datetime) -> datetime:
    """Same day-of-month one calendar month earlier, clamped to the month's last day."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    if not weight_kg or not height_cm:
        return None
    return round(weight_kg / (height_cm / 100) ** 2, 1)


def compute_metrics_stats(
    metrics: Sequence[UserMetric],
    now: datetime | None = None,
) -> MetricsStatsRead:
    """metrics must be ordered newest first (by date_recorded)."""
    if not metrics:
        return MetricsStatsRead()

    now = as_utc(now or utcnow())
    current = metrics[0]
    cutoff = one_month_before(now)

    month_old = next(
        (
            m
            for m in metrics
            if m.date_recorded is not None
            and as_utc(m.date_recorded) <= cutoff
            and m.weight_kg is not None
        ),
        None,
    )
    change = 0.0
    if month_old is not None and current.weight_kg and month_old.weight_kg:
        change = current.weight_kg - month_old.weight_kg

    return MetricsStatsRead(
        current_weight=current.weight_kg,
        weight_change_this_month=change,
        current_height=current.height_cm,
        bmi=bmi(current.weight_kg, current.height_cm),
        total_entries=len(metrics),
        first_entry_date=metrics[-1].date_recorded,
    )
