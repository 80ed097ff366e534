# analysis.py
"""
Budget analysis: buckets a user's entries into calendar months (and, for the
previous month, calendar days) and compares each bucket against the budget
limit. Everything here is pure so the router only has to fetch the rows.
"""
import calendar
from collections import defaultdict
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

LAST_MONTH = "last-month"
LAST_6_MONTHS = "last-6-months"
LAST_12_MONTHS = "last-12-months"

RANGES = (LAST_MONTH, LAST_6_MONTHS, LAST_12_MONTHS)
DEFAULT_RANGE = LAST_12_MONTHS


def normalize_range(range_key):
    if range_key in RANGES:
        return range_key
    return DEFAULT_RANGE


def date_window(range_key, today):
    """Return the inclusive (start, end) dates covered by a range keyword."""
    range_key = normalize_range(range_key)
    first_of_month = today.replace(day=1)

    if range_key == LAST_MONTH:
        start = first_of_month - relativedelta(months=1)
        end = first_of_month - timedelta(days=1)
        return start, end

    months_back = 5 if range_key == LAST_6_MONTHS else 11
    start = first_of_month - relativedelta(months=months_back)
    end = first_of_month + relativedelta(months=1) - timedelta(days=1)
    return start, end


def iter_months(start, end):
    current = start.replace(day=1)
    while current <= end:
        yield current.year, current.month
        current += relativedelta(months=1)


def _bucket(total, budget_limit):
    return {
        "total_expenses": total,
        "budget_limit": budget_limit,
        "exceeded": total > budget_limit,
        "remaining": budget_limit - total,
    }


def monthly_buckets(entries, budget_limit, start, end):
    totals = defaultdict(float)
    for entry_date, price in entries:
        totals[(entry_date.year, entry_date.month)] += price

    months = []
    for year, month in iter_months(start, end):
        bucket = {
            "year": year,
            "month": month,
            "month_name": calendar.month_abbr[month],
        }
        bucket.update(_bucket(totals[(year, month)], budget_limit))
        months.append(bucket)
    return months


def daily_buckets(entries, budget_limit, start, end):
    # Each day is measured against the whole monthly limit, not a daily share
    totals = defaultdict(float)
    for entry_date, price in entries:
        totals[entry_date] += price

    days = []
    current = start
    while current <= end:
        bucket = {
            "year": current.year,
            "month": current.month,
            "day": current.day,
            "date": current.isoformat(),
        }
        bucket.update(_bucket(totals[current], budget_limit))
        days.append(bucket)
        current += timedelta(days=1)
    return days


def build_analysis(entries, budget_limit, range_key=DEFAULT_RANGE, today=None):
    """
    Aggregate ``entries`` (an iterable of ``(date, price)`` pairs) for the
    window named by ``range_key``. Entries outside the window are ignored.
    """
    range_key = normalize_range(range_key)
    today = today or date.today()
    start, end = date_window(range_key, today)

    in_window = [(d, p) for d, p in entries if start <= d <= end]
    months = monthly_buckets(in_window, budget_limit, start, end)

    analysis = {
        "range": range_key,
        "months": months,
        "total_expenses": sum(m["total_expenses"] for m in months),
        "total_budget": len(months) * budget_limit,
        "overall_exceeded": any(m["exceeded"] for m in months),
    }
    if range_key == LAST_MONTH:
        analysis["days"] = daily_buckets(in_window, budget_limit, start, end)
    return analysis
