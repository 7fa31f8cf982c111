from datetime import date

import pytest

from seller_finance.services.payout_schedule import days_until, estimate_payout_date, next_weekday

WEDNESDAY = date(2025, 1, 15)
MONDAY = date(2025, 1, 20)


def test_wednesday_to_next_monday_is_five_days():
    assert next_weekday(WEDNESDAY, 0) == MONDAY
    assert days_until(MONDAY, WEDNESDAY) == 5


def test_next_never_returns_today():
    assert next_weekday(MONDAY, 0) == date(2025, 1, 27)


@pytest.mark.parametrize("offset", range(7))
def test_next_weekday_is_within_a_week(offset):
    today = date(2025, 3, 3 + offset)
    target = next_weekday(today, 4)
    assert target.weekday() == 4
    assert 1 <= (target - today).days <= 7


def test_processing_days_push_the_estimate_back():
    # Friday run paid three days later
    assert estimate_payout_date(WEDNESDAY, weekday=4, processing_days=3) == date(2025, 1, 20)


def test_default_estimate_is_next_monday():
    assert estimate_payout_date(WEDNESDAY) == MONDAY


@pytest.mark.parametrize("weekday", [-1, 7])
def test_weekday_out_of_range(weekday):
    with pytest.raises(ValueError):
        next_weekday(WEDNESDAY, weekday)
