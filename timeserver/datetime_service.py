"""
Current date/time in a requested timezone.

Three renderings of "now": the default textual form, the unix timestamp and
a parsed breakdown whose sections can be selected individually.
"""

import time
import logging
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional, Tuple

from .errors import UnknownTimezoneError
from .models import DateInfo, DateTimeInfo, ErrorMessage, TimeInfo, TimezoneInfo
from .timezones import load_location

logger = logging.getLogger(__name__)

TRUTHY_FLAGS = ("1", "yes", "on", "true")
NANOS_PER_SECOND = 1_000_000_000


def wrong_timezone_message(tz_name: str) -> str:
    return (
        f"Wrong timezone name given '{tz_name}' please use "
        f"/convert/listtimezones endpoint to get list of valid timezones"
    )


def flag_enabled(value: Optional[str]) -> bool:
    """Query flags are truthy for 1/yes/on/true in any letter case."""
    return (value or "").lower() in TRUTHY_FLAGS


def current_instant(zone: tzinfo, now_ns: Optional[int] = None) -> Tuple[datetime, int]:
    """
    Return the instant as an aware datetime in `zone` plus the nanoseconds
    within its second. datetime only carries microseconds, so the
    nanosecond part is kept alongside.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    seconds, nanos = divmod(now_ns, NANOS_PER_SECOND)
    return datetime.fromtimestamp(seconds, tz=zone), nanos


def format_default(moment: datetime, nanos: int) -> str:
    """
    Render as 'YYYY-MM-DD HH:MM:SS[.fraction] +hhmm ABBR'.

    The fraction drops trailing zeros and is left out for whole seconds.
    """
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if nanos:
        text += "." + f"{nanos:09d}".rstrip("0")
    return f"{text} {moment.strftime('%z')} {moment.tzname()}"


def iso_datetime(outtz: str = "", now_ns: Optional[int] = None) -> Dict[str, Any]:
    try:
        zone = load_location(outtz)
    except UnknownTimezoneError:
        return ErrorMessage(error_message=wrong_timezone_message(outtz)).model_dump()

    moment, nanos = current_instant(zone, now_ns)
    return {"iso_datetime": format_default(moment, nanos)}


def unix_timestamp(now_ns: Optional[int] = None) -> Dict[str, int]:
    if now_ns is None:
        now_ns = time.time_ns()
    return {"unix_timestamp": now_ns // NANOS_PER_SECOND}


def datetime_parsed(
    outtz: str = "",
    send_date: bool = False,
    send_time: bool = False,
    send_tz: bool = False,
    now_ns: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Break the current instant in `outtz` into date, time and timezone
    sections. Only the requested sections are included; requesting none
    means all of them.
    """
    try:
        zone = load_location(outtz)
    except UnknownTimezoneError:
        return ErrorMessage(error_message=wrong_timezone_message(outtz)).model_dump()

    if not (send_date or send_time or send_tz):
        send_date = send_time = send_tz = True

    moment, nanos = current_instant(zone, now_ns)
    out_data = DateTimeInfo()
    if send_date:
        out_data.date = DateInfo(year=moment.year, month=moment.month, day=moment.day)
    if send_time:
        out_data.time = TimeInfo(
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
            nano_second=float(nanos),
        )
    if send_tz:
        out_data.tz = TimezoneInfo(
            name=moment.tzname(),
            shift=int(moment.utcoffset().total_seconds()),
        )
    return out_data.model_dump(exclude_none=True)
