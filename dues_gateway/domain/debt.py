"""Debt calculation - closed half-month billing periods owed by a member"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from dues_gateway.domain.models import BillingConfig, DebtResult
from dues_gateway.utils.date_utils import (
    coerce_date,
    days_in_month,
    end_of_month,
    next_day,
    start_of_day,
)


def closing_boundary(cursor: date, closing_day: int) -> date:
    """
    Next sub-period closing date at or after `cursor`.

    Each month has two sub-periods ("quincenas"):
    - A closes on `closing_day`
    - B closes on the last day of the month

    `closing_day` is clamped to the month's length, so in short months a
    closing day of 29-31 makes A and B the same period.
    """
    month_end = end_of_month(cursor)
    closing = min(max(closing_day, 1), days_in_month(cursor.year, cursor.month))

    if cursor.day <= closing:
        return cursor.replace(day=closing)
    return month_end


def count_closed_sub_periods(start: date, end: date, closing_day: int) -> int:
    """
    Count sub-periods starting at `start` whose boundary `end` is strictly after.

    The period in progress on `end` (including one closing that same day) is
    never counted.
    """
    count = 0
    cursor = start

    while True:
        boundary = closing_boundary(cursor, closing_day)
        if end <= boundary:
            break
        count += 1
        cursor = next_day(boundary)

    return count


def calculate_debt(
    join_date: Any,
    config: BillingConfig,
    evaluation_date: date | datetime | None = None,
) -> DebtResult:
    """
    Compute how many closed sub-periods a member owes and the amount.

    Rules:
    - Billing starts at the later of join date and config.cutoff_date
    - Only closed sub-periods are charged
    - amount = sub-periods * base_amount (late/penalty fees are not applied here)

    Never raises for date input: a missing or unreadable join date is treated
    as joining on the evaluation date, which yields zero debt.

    Args:
        join_date: date, datetime, "YYYY-MM-DD", "YYYYMMDD", epoch ms or None
        config: Billing configuration snapshot
        evaluation_date: Date the debt is evaluated at (default: today)

    Example:
        closing_day=14, cutoff 2025-01-15, joined 2025-01-01, evaluated 2025-02-01
        → billing starts 2025-01-15, 2025-01-31 has closed → 1 sub-period
    """
    today = start_of_day(evaluation_date) if evaluation_date is not None else date.today()
    joined = coerce_date(join_date, fallback=today)

    range_start = max(joined, config.cutoff_date)
    sub_periods = count_closed_sub_periods(range_start, today, config.closing_day)

    return DebtResult(
        sub_periods_owed=sub_periods,
        amount_owed=Decimal(sub_periods) * config.base_amount,
        range_start=range_start,
        range_end=today,
    )
