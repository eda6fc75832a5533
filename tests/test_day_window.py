from datetime import datetime, timedelta, timezone

import pytest

from nutrivision.domain.nutrition.day_window import (
    DAY_SPAN,
    REFERENCE_TIMEZONE,
    day_window,
    end_of_day,
    reference_timezone,
    start_of_day,
)

UTC = timezone.utc


def test_start_and_end_follow_reference_zone_date():
    # 22:30 UTC is already 01:30 of the next day at UTC+3.
    instant = datetime(2024, 3, 10, 22, 30, tzinfo=UTC)

    start = start_of_day(instant)
    end = end_of_day(instant)

    assert start == datetime(2024, 3, 10, 21, 0, tzinfo=UTC)
    assert end == datetime(2024, 3, 11, 20, 59, 59, 999000, tzinfo=UTC)
    assert start.utcoffset() == timedelta(hours=3)


@pytest.mark.parametrize("hour", [0, 5, 12, 20, 23])
def test_span_is_constant(hour):
    instant = datetime(2024, 7, 1, hour, 15, tzinfo=UTC)

    window = day_window(instant)

    assert window.end - window.start == DAY_SPAN
    assert window.contains(instant)


def test_naive_instant_is_treated_as_utc():
    naive = datetime(2024, 3, 10, 22, 30)

    assert start_of_day(naive) == start_of_day(naive.replace(tzinfo=UTC))


def test_window_ignores_caller_timezone():
    moment = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    same_moment_in_new_york = moment.astimezone(timezone(timedelta(hours=-5)))

    assert day_window(moment) == day_window(same_moment_in_new_york)


def test_custom_reference_offset():
    tz = reference_timezone(5.5)
    instant = datetime(2024, 3, 10, 20, 0, tzinfo=UTC)

    window = day_window(instant, tz)

    assert window.start == datetime(2024, 3, 10, 18, 30, tzinfo=UTC)
    assert reference_timezone() is REFERENCE_TIMEZONE


def test_day_window_defaults_to_now():
    window = day_window()

    assert window.contains(datetime.now(UTC))
