from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import HTTPException, Query

timezone_query = Query(
    default=None,
    description="IANA timezone used to group entries by day, defaults to server local time.",
)


def resolve_timezone(name: Optional[str]) -> Optional[ZoneInfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=400, detail={"error": f"Unknown timezone: {name}"}
        ) from exc
