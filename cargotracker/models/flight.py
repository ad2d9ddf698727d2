"""
FlightRecord model - one scheduled movement from the Avinor flight feed.

Records are built fresh on every fetch cycle and discarded after the
rendering pass that uses them. Nothing here is persisted.

Design notes:
- Text fields default to '' when the feed omits them
- Carrier code is uppercased by the parser, not here
- Timestamps stay as the feed supplied them (UTC ISO-8601 strings);
  ``scheduled_at`` gives the parsed value for sorting
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    """
    Movement direction as coded by the feed (``arr_dep``).

    Only 'A' means arrival; every other value is shown as a departure.
    """
    ARRIVAL = 'A'
    DEPARTURE = 'D'


class StatusCode(str, Enum):
    """
    Flight status codes published by Avinor.

    Codes outside this set are passed through verbatim.
    """
    ARRIVED = 'A'
    CANCELLED = 'C'
    DEPARTED = 'D'
    NEW_TIME = 'E'
    NEW_INFO = 'N'


def parse_utc_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the feed into an aware UTC datetime.

    Accepts a trailing 'Z' or an explicit offset; naive values are taken
    as UTC. Returns None for empty or unparseable input, including values
    whose UTC equivalent falls outside the datetime range.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class FlightRecord:
    """
    A single arrival or departure at the configured airport.

    Fields:
        airline: Carrier code, uppercase (e.g., 'QR'); '' if missing
        flight_id: Flight number as published (e.g., 'QR123')
        schedule_time: Scheduled time, UTC ISO-8601 string
        direction: 'A' for arrival, anything else is a departure
        other_airport: Remote airport IATA code
        status_code: Status code, None when the feed has no status element
        status_time: Time attached to the status, mostly for 'E' (new time)
    """
    airline: str = ''
    flight_id: str = ''
    schedule_time: str = ''
    direction: str = ''
    other_airport: str = ''
    status_code: Optional[str] = None
    status_time: Optional[str] = None

    @property
    def is_arrival(self) -> bool:
        return self.direction == Direction.ARRIVAL.value

    @property
    def scheduled_at(self) -> Optional[datetime]:
        """Scheduled time as an aware UTC datetime, or None if unparseable."""
        return parse_utc_timestamp(self.schedule_time)
