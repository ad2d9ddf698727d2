"""
Cargo operator classification.

A flight counts as cargo when either:
1. Its carrier code is in the static cargo code list, or
2. The airline name resolved from the directory contains a cargo keyword
   (case-insensitive substring match, e.g. 'Qatar Airways Cargo' ~ 'cargo')

The first rule that matches wins. Unknown carriers resolve to an empty
name and can only match through the code list.
"""

import logging
from typing import Iterable, List, Optional

from cargotracker.config import config
from cargotracker.models import AirlineDirectory, CargoMatchRule, FlightRecord

logger = logging.getLogger(__name__)


class CargoClassifier:
    """
    Decides which flights are operated by cargo carriers.

    The match rule is injected once; classification is a pure function
    of the flight and the directory passed in.
    """

    def __init__(self, rule: Optional[CargoMatchRule] = None):
        self.rule = rule or config.cargo.rule

    def is_cargo(self, flight: FlightRecord, directory: AirlineDirectory) -> bool:
        code = flight.airline
        if code in self.rule.codes:
            return True

        name = (directory.get(code) or '').lower()
        return any(keyword.lower() in name for keyword in self.rule.keywords)

    def filter(
        self,
        flights: Iterable[FlightRecord],
        directory: AirlineDirectory,
    ) -> List[FlightRecord]:
        """Return the cargo flights, preserving input order."""
        flights = list(flights)
        cargo = [f for f in flights if self.is_cargo(f, directory)]
        logger.info(f'Classified {len(cargo)} of {len(flights)} flights as cargo')
        return cargo
