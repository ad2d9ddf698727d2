"""
Board rows - display-ready table rows for the presentation layer.

Every flight becomes one row with six columns:
Local Time | Airline | Flight | Direction | Airport | Status

Empty, loading and error states are a single row whose message spans
the whole table.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from cargotracker.display.formatting import describe_direction, describe_status, format_local_time
from cargotracker.models import AirlineDirectory, FlightRecord

COLUMNS = ('Local Time', 'Airline', 'Flight', 'Direction', 'Airport', 'Status')

NO_FLIGHTS_MESSAGE = 'No cargo flights found in the selected timeframe.'
LOADING_MESSAGE = 'Loading flights…'
ERROR_MESSAGE_PREFIX = 'Error fetching flight data: '


@dataclass(frozen=True)
class BoardRow:
    """
    One table row.

    A placeholder row carries only ``message`` and renders as a single
    cell spanning all columns.
    """
    local_time: str = ''
    airline: str = ''
    flight_id: str = ''
    direction: str = ''
    other_airport: str = ''
    status: str = ''
    message: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.message is not None

    @property
    def cells(self) -> List[str]:
        if self.is_placeholder:
            return [self.message]
        return [
            self.local_time,
            self.airline,
            self.flight_id,
            self.direction,
            self.other_airport,
            self.status,
        ]

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        if self.is_placeholder:
            return {'message': self.message}
        return {
            'local_time': self.local_time,
            'airline': self.airline,
            'flight_id': self.flight_id,
            'direction': self.direction,
            'airport': self.other_airport,
            'status': self.status,
        }


def placeholder_row(message: str) -> BoardRow:
    return BoardRow(message=message)


def error_row(error: Exception) -> BoardRow:
    return placeholder_row(f'{ERROR_MESSAGE_PREFIX}{error}')


def build_row(flight: FlightRecord, directory: AirlineDirectory, tz: Optional[str] = None) -> BoardRow:
    """Format one flight, resolving the airline name through the directory."""
    return BoardRow(
        local_time=format_local_time(flight.schedule_time, tz),
        airline=directory.display_name(flight.airline),
        flight_id=flight.flight_id,
        direction=describe_direction(flight.direction),
        other_airport=flight.other_airport,
        status=describe_status(flight.status_code, flight.status_time, tz),
    )


def build_rows(
    flights: Iterable[FlightRecord],
    directory: AirlineDirectory,
    tz: Optional[str] = None,
) -> List[BoardRow]:
    """
    Format flights into rows, keeping their order.

    An empty input yields exactly one placeholder row.
    """
    rows = [build_row(flight, directory, tz) for flight in flights]
    if not rows:
        return [placeholder_row(NO_FLIGHTS_MESSAGE)]
    return rows
