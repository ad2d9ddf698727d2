"""
Parsers for the Avinor XML feeds.

Flight feed layout (abridged):

    <airport name="OSL">
      <flights lastUpdate="2024-06-14T08:00:00Z">
        <flight uniqueID="123456">
          <airline>QR</airline>
          <flight_id>QR123</flight_id>
          <dom_int>I</dom_int>
          <schedule_time>2024-06-14T08:45:00Z</schedule_time>
          <arr_dep>A</arr_dep>
          <airport>DOH</airport>
          <status code="E" time="2024-06-14T09:00:00Z"/>
        </flight>
      </flights>
    </airport>

Airline-name feed layout:

    <airlineNames>
      <airlineName code="QR" name="Qatar Airways"/>
    </airlineNames>

Only a payload that is not a well-formed XML document with the expected
root is an error; a truncated response is rejected rather than repaired.
Missing child elements and attributes become '' or None.
"""

import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag
from lxml import etree

from cargotracker.errors import MalformedFeedError
from cargotracker.models import AirlineDirectory, FlightRecord

logger = logging.getLogger(__name__)

FLIGHTS_ROOT = 'airport'
AIRLINE_NAMES_ROOT = 'airlineNames'

Payload = Union[str, bytes]

_STRICT_PARSER = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)


def parse_document(payload: Optional[Payload], root: str) -> Tag:
    """
    Parse an XML payload and return its root element.

    The returned element supports tag-name lookup (``find``/``find_all``)
    and attribute lookup (``get``), which is all the feed parsers need.

    Raises:
        MalformedFeedError if the payload is empty, not well-formed XML,
        or rooted at an element other than ``root``
    """
    if payload is None or not payload.strip():
        raise MalformedFeedError(f'Empty payload, expected <{root}> document', feed=root)

    # BeautifulSoup repairs broken markup, so check well-formedness strictly first
    raw = payload.encode('utf-8') if isinstance(payload, str) else payload
    try:
        etree.fromstring(raw, parser=_STRICT_PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedFeedError(f'Payload is not well-formed XML: {e}', feed=root) from e

    try:
        soup = BeautifulSoup(payload, 'xml')
    except Exception as e:
        raise MalformedFeedError(f'Payload rejected by XML parser: {e}', feed=root) from e

    top = next((node for node in soup.contents if isinstance(node, Tag)), None)

    if top is None:
        raise MalformedFeedError(f'Payload is not an XML document, expected <{root}>', feed=root)
    if top.name != root:
        raise MalformedFeedError(f'Unexpected root element <{top.name}>, expected <{root}>', feed=root)

    return top


def _child_text(element: Tag, tag: str) -> str:
    """Stripped text of the first descendant named ``tag``, or ''."""
    child = element.find(tag)
    return child.get_text(strip=True) if child is not None else ''


def parse_airline_names(payload: Optional[Payload]) -> AirlineDirectory:
    """
    Build an AirlineDirectory from the airline-name feed.

    Entries missing a code or a name are skipped. Duplicate codes keep
    the last name seen.
    """
    root = parse_document(payload, AIRLINE_NAMES_ROOT)

    entries = []
    skipped = 0
    for element in root.find_all('airlineName'):
        code = element.get('code')
        name = element.get('name')
        if code and name:
            entries.append((code, name))
        else:
            skipped += 1

    if skipped:
        logger.debug(f'Skipped {skipped} airline entries without code or name')

    directory = AirlineDirectory(entries)
    logger.debug(f'Parsed {len(directory)} airline names')
    return directory


def _parse_flight(element: Tag) -> FlightRecord:
    status = element.find('status')
    status_code = status_time = None
    if status is not None:
        status_code = status.get('code') or None
        status_time = status.get('time') or None

    return FlightRecord(
        airline=_child_text(element, 'airline').upper(),
        flight_id=_child_text(element, 'flight_id'),
        schedule_time=_child_text(element, 'schedule_time'),
        direction=_child_text(element, 'arr_dep'),
        other_airport=_child_text(element, 'airport'),
        status_code=status_code,
        status_time=status_time,
    )


def parse_flights(payload: Optional[Payload]) -> List[FlightRecord]:
    """
    Parse the flight feed into FlightRecords, in feed order.

    Raises:
        MalformedFeedError if the payload is not a flight feed document
    """
    root = parse_document(payload, FLIGHTS_ROOT)

    flights = [_parse_flight(element) for element in root.find_all('flight')]
    logger.debug(f'Parsed {len(flights)} flights')
    return flights
