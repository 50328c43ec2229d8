"""Banking Days — weekends and US federal holidays are skipped."""

from datetime import date, datetime

from paygate.core.banking_days import add_banking_days, is_banking_day


def test_weekday_is_banking_day():
    assert is_banking_day(date(2025, 10, 15))


def test_weekend_is_not_banking_day():
    assert not is_banking_day(date(2025, 10, 18))
    assert not is_banking_day(date(2025, 10, 19))


def test_federal_holiday_is_not_banking_day():
    assert not is_banking_day(date(2025, 7, 4))
    assert not is_banking_day(date(2025, 12, 25))


def test_next_day_midweek():
    assert add_banking_days(date(2025, 10, 15), 1) == date(2025, 10, 16)


def test_friday_rolls_to_monday():
    assert add_banking_days(date(2025, 10, 17), 1) == date(2025, 10, 20)


def test_skips_holiday_and_weekend():
    # Thursday before Independence Day (Friday)
    assert add_banking_days(date(2025, 7, 3), 1) == date(2025, 7, 7)


def test_accepts_datetime():
    assert add_banking_days(datetime(2025, 10, 15, 23, 59), 2) == date(2025, 10, 17)


def test_friday_before_saturday_holiday_is_banking_day():
    # Independence Day 2026 is a Saturday; the Fed does not close the Friday
    assert is_banking_day(date(2026, 7, 3))
    assert add_banking_days(date(2026, 7, 2), 1) == date(2026, 7, 3)


def test_monday_after_sunday_holiday_is_closed():
    # New Year's Day 2023 is a Sunday
    assert not is_banking_day(date(2023, 1, 2))
    assert add_banking_days(date(2022, 12, 30), 1) == date(2023, 1, 3)


def test_new_years_eve_before_saturday_holiday_is_open():
    # New Year's Day 2022 is a Saturday
    assert is_banking_day(date(2021, 12, 31))
