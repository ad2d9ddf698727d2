"""
Display formatting for board rows.

Converts feed timestamps (UTC) to local wall-clock strings and feed
status codes to readable phrases.

    format_local_time('2024-06-14T08:45:00Z')   -> '14 Jun 10:45'
    describe_status('E', '2024-06-14T09:00:00Z') -> 'New time 14 Jun 11:00'
    describe_status('X', None)                   -> 'X'
"""

import logging
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from cargotracker.config import config
from cargotracker.models import Direction, StatusCode, parse_utc_timestamp

logger = logging.getLogger(__name__)

# Fixed English abbreviations, independent of the process locale
MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

STATUS_DESCRIPTIONS = {
    StatusCode.ARRIVED.value: 'Arrived',
    StatusCode.CANCELLED.value: 'Cancelled',
    StatusCode.DEPARTED.value: 'Departed',
    StatusCode.NEW_TIME.value: 'New time',
    StatusCode.NEW_INFO.value: 'New info',
}


@lru_cache(maxsize=None)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def format_local_time(timestamp: Optional[str], tz: Optional[str] = None) -> str:
    """
    Render a UTC timestamp as 'DD Mon HH:MM' in the display timezone.

    Args:
        timestamp: ISO-8601 string from the feed ('Z', offset, or naive UTC)
        tz: IANA timezone name, defaults to the configured display timezone

    Returns:
        Formatted local time, '' for empty input, or the input unchanged
        if it cannot be parsed
    """
    if not timestamp:
        return ''

    moment = parse_utc_timestamp(timestamp)
    if moment is None:
        logger.warning(f'Unparseable timestamp from feed: {timestamp!r}')
        return timestamp

    local = moment.astimezone(_zone(tz or config.display.timezone))
    month = MONTH_ABBREVIATIONS[local.month - 1]
    return f'{local.day:02d} {month} {local.hour:02d}:{local.minute:02d}'


def describe_status(code: Optional[str], time: Optional[str] = None, tz: Optional[str] = None) -> str:
    """
    Human-readable description of a feed status code.

    'E' (new time) embeds the local rendering of ``time`` when present.
    Unknown codes are returned as-is; no code gives ''.
    """
    if not code:
        return ''

    if code == StatusCode.NEW_TIME.value and time:
        return f'New time {format_local_time(time, tz)}'

    return STATUS_DESCRIPTIONS.get(code, code)


def describe_direction(code: Optional[str]) -> str:
    return 'Arrival' if code == Direction.ARRIVAL.value else 'Departure'
