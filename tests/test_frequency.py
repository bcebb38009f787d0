"""Tests for habitcore/frequency.py."""

from datetime import date

import pytest

from habitcore.errors import InvalidFrequencyConfig
from habitcore.frequency import matches, validate_frequency
from habitcore.models import FrequencyConfig


MONDAY = date(2024, 1, 1)
TUESDAY = date(2024, 1, 2)
SUNDAY = date(2024, 1, 7)


def test_daily_matches_every_day():
    freq = FrequencyConfig(type="daily")
    assert all(matches(date(2024, 1, d), freq) for d in range(1, 15))


def test_weekly_matches_every_day():
    freq = FrequencyConfig(type="weekly", target=3)
    assert matches(MONDAY, freq) is True
    assert matches(SUNDAY, freq) is True


def test_custom_matches_listed_weekdays():
    freq = FrequencyConfig(type="custom", weekdays=(1, 3, 5))
    assert matches(MONDAY, freq) is True
    assert matches(TUESDAY, freq) is False
    assert matches(date(2024, 1, 3), freq) is True
    assert matches(SUNDAY, freq) is False


def test_custom_sunday_is_zero():
    freq = FrequencyConfig(type="custom", weekdays=(0,))
    assert matches(SUNDAY, freq) is True
    assert matches(MONDAY, freq) is False


def test_before_start_date_never_matches():
    freq = FrequencyConfig(type="daily")
    assert matches(date(2023, 12, 31), freq, start_date=MONDAY) is False
    assert matches(MONDAY, freq, start_date=MONDAY) is True


def test_custom_without_weekdays_fails_fast():
    with pytest.raises(InvalidFrequencyConfig):
        matches(MONDAY, FrequencyConfig(type="custom"))


def test_custom_with_out_of_range_weekday():
    with pytest.raises(InvalidFrequencyConfig):
        validate_frequency(FrequencyConfig(type="custom", weekdays=(1, 7)))
    with pytest.raises(InvalidFrequencyConfig):
        validate_frequency(FrequencyConfig(type="custom", weekdays=("mon",)))


def test_unknown_frequency_type():
    with pytest.raises(InvalidFrequencyConfig) as exc:
        validate_frequency(FrequencyConfig(type="monthly"))
    assert exc.value.code == "INVALID_FREQUENCY"


def test_weekly_target_must_be_positive():
    with pytest.raises(InvalidFrequencyConfig):
        validate_frequency(FrequencyConfig(type="weekly", target=0))
