"""Bounds of "today" judged in a fixed reference timezone.

Range queries against the entry store work on absolute instants, while the
question "which day is it" has to be answered the same way for every user.
The day is therefore computed on the wall clock of a reference timezone and
converted back to instants. The reference offset is constant: daylight saving
is not modelled.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from ...models.time import DayWindow

REFERENCE_UTC_OFFSET_HOURS = 3.0
REFERENCE_TIMEZONE = timezone(timedelta(hours=REFERENCE_UTC_OFFSET_HOURS), "MSK")

DAY_SPAN = timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


def reference_timezone(offset_hours: float = REFERENCE_UTC_OFFSET_HOURS) -> tzinfo:
    """Return the fixed-offset timezone used to decide day boundaries."""

    if offset_hours == REFERENCE_UTC_OFFSET_HOURS:
        return REFERENCE_TIMEZONE
    return timezone(timedelta(hours=offset_hours))


def _in_reference(instant: datetime, reference_tz: tzinfo) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(reference_tz)


def start_of_day(
    instant: datetime, reference_tz: tzinfo = REFERENCE_TIMEZONE
) -> datetime:
    """Midnight of ``instant``'s reference-zone date, as an aware datetime."""

    local = _in_reference(instant, reference_tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(
    instant: datetime, reference_tz: tzinfo = REFERENCE_TIMEZONE
) -> datetime:
    """23:59:59.999 of ``instant``'s reference-zone date."""

    local = _in_reference(instant, reference_tz)
    return local.replace(hour=23, minute=59, second=59, microsecond=999000)


def day_window(
    instant: Optional[datetime] = None, reference_tz: tzinfo = REFERENCE_TIMEZONE
) -> DayWindow:
    """Inclusive query bounds for the reference day containing ``instant``.

    ``instant`` defaults to the current time.
    """

    if instant is None:
        instant = datetime.now(timezone.utc)
    return DayWindow(
        start=start_of_day(instant, reference_tz),
        end=end_of_day(instant, reference_tz),
    )
