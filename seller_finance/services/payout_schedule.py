"""Payout date estimation.

Payouts run on a fixed weekday. The estimate is the next occurrence of that
weekday strictly after today, optionally pushed back by a number of
processing days:

  - Weekly Monday run: weekday=0, processing_days=0 (default)
  - Friday cycle paid three days later: weekday=4, processing_days=3

This is a heuristic for display only; the payment provider decides the real
settlement date.
"""

from __future__ import annotations

from datetime import date, timedelta


def next_weekday(today: date, weekday: int) -> date:
    """Next date falling on weekday (0=Monday), never today itself.

    Args:
        today: Reference date
        weekday: Target weekday, 0=Monday ... 6=Sunday

    Returns:
        The first matching date after today (1 to 7 days later)
    """
    if not 0 <= weekday <= 6:
        raise ValueError(f"weekday must be between 0 and 6, got {weekday}")
    days = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days)


def estimate_payout_date(today: date, weekday: int = 0, processing_days: int = 0) -> date:
    """Estimated date funds are sent for the current cycle."""
    return next_weekday(today, weekday) + timedelta(days=processing_days)


def days_until(target: date, today: date) -> int:
    return (target - today).days
