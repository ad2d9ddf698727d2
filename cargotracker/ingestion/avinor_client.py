"""
Avinor public XML feed client.

Handles communication with the two unauthenticated Avinor feeds:
- XmlFeed: scheduled flights for one airport over a time window
- airlineNames: carrier code to airline name directory

Each call is a single attempt. Transport failures and non-success
responses are logged and re-raised as NetworkError; the caller decides
what to show the user.

Flight feed query parameters:
airport   - IATA code of the airport (e.g., 'OSL')
TimeFrom  - hours before now to include
TimeTo    - hours after now to include
"""

import logging
from typing import Optional

import requests

from cargotracker.config import config
from cargotracker.errors import NetworkError

logger = logging.getLogger(__name__)

FLIGHTS_FEED = 'flights'
AIRLINE_NAMES_FEED = 'airline names'


class AvinorClient:
    """
    Client for the Avinor flight and airline-name feeds.

    Handles:
    - GET requests to the XmlFeed and airlineNames endpoints
    - Airport and time-window query parameters
    - Mapping requests errors to NetworkError
    """

    def __init__(
        self,
        base_url: str = 'https://asrv.avinor.no',
        airport: str = 'OSL',
        time_from_hours: int = 1,
        time_to_hours: int = 24,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.airport = airport
        self.time_from_hours = time_from_hours
        self.time_to_hours = time_to_hours
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'AvinorClient':
        """Create client from application configuration."""
        return cls(
            base_url=config.feed.base_url,
            airport=config.feed.airport,
            time_from_hours=config.feed.time_from_hours,
            time_to_hours=config.feed.time_to_hours,
            timeout=config.feed.timeout_seconds,
        )

    @property
    def flights_url(self) -> str:
        return f'{self.base_url}/XmlFeed/v1.0'

    @property
    def airline_names_url(self) -> str:
        return f'{self.base_url}/airlineNames/v1.0'

    def flight_params(self) -> dict:
        """Query parameters for the flight feed."""
        return {
            'airport': self.airport,
            'TimeFrom': str(self.time_from_hours),
            'TimeTo': str(self.time_to_hours),
        }

    def _get(self, feed: str, url: str, params: Optional[dict] = None) -> bytes:
        """
        Issue one GET request and return the raw response body.

        Raises:
            NetworkError on transport failure or non-2xx status
        """
        logger.debug(f'Fetching {feed}: {url} params={params}')

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else 'unknown'
            logger.error(f'Avinor {feed} feed error: HTTP {status}')
            raise NetworkError(f'{feed} feed returned HTTP {status}', feed=feed) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'Avinor {feed} request failed: {e}')
            raise NetworkError(f'{feed} feed request failed: {e}', feed=feed) from e

        logger.info(f'Received {len(response.content)} bytes from {feed} feed')
        return response.content

    def fetch_flights(self) -> bytes:
        """Fetch the raw flight feed XML for the configured airport and window."""
        return self._get(FLIGHTS_FEED, self.flights_url, params=self.flight_params())

    def fetch_airline_names(self) -> bytes:
        """Fetch the raw airline-name directory XML."""
        return self._get(AIRLINE_NAMES_FEED, self.airline_names_url)
