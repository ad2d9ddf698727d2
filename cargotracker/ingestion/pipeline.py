"""
Cargo flight pipeline - orchestrates data flow from the Avinor feeds to
display-ready flights.

Pipeline stages:
1. Fetch: Request the flight feed and the airline-name feed in parallel
2. Join: Wait for both, failing fast if either request fails
3. Parse: Turn each payload into FlightRecords / an AirlineDirectory
4. Filter: Keep cargo flights only
5. Sort: Order by scheduled time (stable)

Any failure in stages 1-3 aborts the run with a single FeedError; no
partial result is ever returned.
"""

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from cargotracker.classification import CargoClassifier
from cargotracker.ingestion.avinor_client import AvinorClient
from cargotracker.ingestion.parsers import parse_airline_names, parse_flights
from cargotracker.models import AirlineDirectory, FlightRecord

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Cargo flights for one run, sorted by scheduled time."""
    flights: List[FlightRecord]
    directory: AirlineDirectory
    total_flights: int
    duration_ms: float = 0.0
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _sort_key(flight: FlightRecord) -> Tuple[bool, datetime]:
    # Flights without a parseable time go last, in feed order
    scheduled = flight.scheduled_at
    if scheduled is None:
        return (True, datetime.min.replace(tzinfo=timezone.utc))
    return (False, scheduled)


def sort_by_schedule(flights: List[FlightRecord]) -> List[FlightRecord]:
    """Stable ascending sort by scheduled time."""
    return sorted(flights, key=_sort_key)


class CargoFlightPipeline:
    """
    Runs one fetch, parse, filter, sort cycle.

    Holds no state between runs; every call to ``run()`` fetches both
    feeds again.
    """

    def __init__(
        self,
        client: Optional[AvinorClient] = None,
        classifier: Optional[CargoClassifier] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            client: Avinor feed client (created from config if None)
            classifier: Cargo classifier (default rule from config if None)
        """
        self.client = client or AvinorClient.from_config()
        self.classifier = classifier or CargoClassifier()

    def _fetch_both(self) -> Tuple[bytes, bytes]:
        """
        Fetch both feeds concurrently and join.

        Raises the first failure without waiting for the other request.
        """
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix='avinor-fetch')
        try:
            flights_future: Future = executor.submit(self.client.fetch_flights)
            airlines_future: Future = executor.submit(self.client.fetch_airline_names)

            done, _ = wait([flights_future, airlines_future], return_when=FIRST_EXCEPTION)
            for future in (flights_future, airlines_future):
                if future in done and future.exception() is not None:
                    raise future.exception()

            return flights_future.result(), airlines_future.result()
        finally:
            # A request still in flight after a failure is left to finish on its own
            executor.shutdown(wait=False)

    def run(self) -> PipelineResult:
        """
        Execute one pipeline cycle.

        Returns:
            PipelineResult with the sorted cargo flights

        Raises:
            NetworkError if either feed request fails
            MalformedFeedError if either payload cannot be parsed
        """
        start_time = time.perf_counter()

        # Stage 1-2: Fetch and join
        flights_payload, airlines_payload = self._fetch_both()

        # Stage 3: Parse
        directory = parse_airline_names(airlines_payload)
        all_flights = parse_flights(flights_payload)

        # Stage 4: Filter
        cargo_flights = self.classifier.filter(all_flights, directory)

        # Stage 5: Sort
        cargo_flights = sort_by_schedule(cargo_flights)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f'Pipeline run: {len(cargo_flights)} cargo flights of {len(all_flights)} '
            f'({len(directory)} airlines) in {duration_ms:.0f}ms'
        )

        return PipelineResult(
            flights=cargo_flights,
            directory=directory,
            total_flights=len(all_flights),
            duration_ms=duration_ms,
        )
