"""Suggested liquidation periods relative to a given day."""

from datetime import date, timedelta

from src.crm_common.datetime_utils import month_bounds, previous_month_bounds
from src.crm_reporting.domain.models import SuggestedPeriod


def suggested_periods(day: date) -> list[SuggestedPeriod]:
    month_first, month_last = month_bounds(day)
    prev_first, prev_last = previous_month_bounds(day)
    return [
        SuggestedPeriod("current_month", month_first, month_last),
        SuggestedPeriod("previous_month", prev_first, prev_last),
        SuggestedPeriod("last_30_days", day - timedelta(days=30), day),
        SuggestedPeriod("year_to_date", day.replace(month=1, day=1), day),
    ]
