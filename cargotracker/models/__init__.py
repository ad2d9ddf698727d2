"""
Domain models for the cargo flight board.

All models are plain in-memory values created per fetch cycle:
1. FlightRecord - one scheduled movement from the flight feed
2. AirlineDirectory - carrier code to airline name lookup
3. CargoMatchRule - static cargo classification lists
"""

from cargotracker.models.airline import AirlineDirectory
from cargotracker.models.cargo import CargoMatchRule
from cargotracker.models.flight import Direction, FlightRecord, StatusCode, parse_utc_timestamp

__all__ = [
    'AirlineDirectory',
    'CargoMatchRule',
    'Direction',
    'FlightRecord',
    'StatusCode',
    'parse_utc_timestamp',
]
