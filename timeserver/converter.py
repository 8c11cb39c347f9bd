"""
Timezone conversion for datetimes in the fixed layout YYYY-MM-DDTHH:MM:SS.

The layout carries no offset: the wall time is read as occurring in the
source timezone and re-rendered, in the same layout, in the target one.
"""

import re
import logging
from datetime import datetime, tzinfo

from dateutil import tz as dateutil_tz
from pydantic import ValidationError

from .errors import ConversionRequestError, DatetimeLayoutError
from .models import ConversionRequest, ConversionResult
from .timezones import load_location

logger = logging.getLogger(__name__)

DATETIME_LAYOUT = "%Y-%m-%dT%H:%M:%S"
LAYOUT_DISPLAY = "YYYY-MM-DDTHH:MM:SS"

# strptime alone accepts single-digit fields
_LAYOUT_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")


def decode_request(body: bytes) -> ConversionRequest:
    try:
        return ConversionRequest.model_validate_json(body)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConversionRequestError(f"invalid request body: {first['msg']}") from e


def parse_in_location(value: str, zone: tzinfo) -> datetime:
    """Parse `value` in the fixed layout as a wall time in `zone`."""
    if not _LAYOUT_PATTERN.fullmatch(value):
        raise DatetimeLayoutError(f'parsing time "{value}" as "{LAYOUT_DISPLAY}": cannot parse')
    try:
        naive = datetime.strptime(value, DATETIME_LAYOUT)
    except ValueError as e:
        raise DatetimeLayoutError(f'parsing time "{value}": {e}') from e

    moment = naive.replace(tzinfo=zone)
    if not dateutil_tz.datetime_exists(moment):
        logger.debug(f"{value} does not exist in {zone}, using the pre-transition offset")
    elif dateutil_tz.datetime_ambiguous(moment):
        logger.debug(f"{value} is ambiguous in {zone}, using the first occurrence")
    return moment


def format_layout(moment: datetime) -> str:
    # isoformat pads years below 1000, strftime('%Y') does not
    return moment.replace(tzinfo=None).isoformat(timespec="seconds")


def convert_timezone(request: ConversionRequest) -> ConversionResult:
    """
    Convert `request.datetime_string` from the source to the target zone.

    Raises UnknownTimezoneError for either zone name and
    DatetimeLayoutError for a string not in the fixed layout.
    """
    from_zone = load_location(request.from_timezone)
    to_zone = load_location(request.to_timezone)
    try:
        moment = parse_in_location(request.datetime_string, from_zone)
        converted = moment.astimezone(to_zone)
    except OverflowError as e:
        raise DatetimeLayoutError(f'time "{request.datetime_string}" is out of range') from e

    return ConversionResult(
        timezone=request.to_timezone,
        datetime_string=format_layout(converted),
    )
