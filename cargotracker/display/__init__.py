"""
Presentation helpers: time/status formatting and table rows.
"""

from cargotracker.display.formatting import describe_direction, describe_status, format_local_time
from cargotracker.display.rows import (
    COLUMNS,
    LOADING_MESSAGE,
    NO_FLIGHTS_MESSAGE,
    BoardRow,
    build_rows,
    error_row,
    placeholder_row,
)

__all__ = [
    'COLUMNS',
    'LOADING_MESSAGE',
    'NO_FLIGHTS_MESSAGE',
    'BoardRow',
    'build_rows',
    'describe_direction',
    'describe_status',
    'error_row',
    'format_local_time',
    'placeholder_row',
]
