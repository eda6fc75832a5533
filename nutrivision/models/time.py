from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Literal, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field


class TimeContext(BaseModel):
    """Mixin providing local time and part of day information."""

    local_time: datetime = Field(..., description="Current local time with timezone")
    part_of_day: Literal["night", "morning", "afternoon", "evening"]


class DayWindow(BaseModel):
    """Inclusive bounds of one calendar day expressed as absolute instants."""

    start: datetime = Field(..., description="First instant of the day (00:00:00.000)")
    end: datetime = Field(..., description="Last instant of the day (23:59:59.999)")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def part_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


def get_local_time(
    timezone: Optional[Union[str, tzinfo]] = None,
) -> Tuple[datetime, str]:
    """Return current local time and a human-friendly part of day.

    Args:
        timezone: IANA timezone string or ``tzinfo``. ``None`` uses the
            timezone of the running process.

    Returns:
        Tuple of current localized datetime and part of day string.
    """

    if timezone is None:
        now: datetime = datetime.now().astimezone()
    elif isinstance(timezone, str):
        now = datetime.now(ZoneInfo(timezone))
    else:
        now = datetime.now(timezone)
    return now, part_of_day(now.hour)
