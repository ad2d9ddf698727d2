"""
Shared pytest fixtures used across the test modules.
"""
from __future__ import annotations

import os

# Never start a background load from tests
os.environ.setdefault("LOAD_ON_START", "0")

import pytest  # noqa: E402

from cargotracker.classification import CargoClassifier  # noqa: E402
from cargotracker.ingestion.pipeline import PipelineResult  # noqa: E402
from cargotracker.models import AirlineDirectory, CargoMatchRule, FlightRecord  # noqa: E402


FLIGHTS_XML = """<?xml version="1.0" encoding="utf-8"?>
<airport name="OSL">
  <flights lastUpdate="2024-06-14T08:00:00Z">
    <flight uniqueID="1001">
      <airline>DY</airline>
      <flight_id>DY740</flight_id>
      <dom_int>S</dom_int>
      <schedule_time>2024-06-14T09:30:00Z</schedule_time>
      <arr_dep>D</arr_dep>
      <airport>CPH</airport>
      <gate>D7</gate>
    </flight>
    <flight uniqueID="1002">
      <airline>qr</airline>
      <flight_id>QR123</flight_id>
      <dom_int>I</dom_int>
      <schedule_time>2024-06-14T08:45:00Z</schedule_time>
      <arr_dep>A</arr_dep>
      <airport>DOH</airport>
      <status code="E" time="2024-06-14T09:00:00Z"/>
    </flight>
    <flight uniqueID="1003">
      <airline>CV</airline>
      <flight_id>CV7301</flight_id>
      <dom_int>I</dom_int>
      <schedule_time>2024-06-14T07:15:00Z</schedule_time>
      <arr_dep>A</arr_dep>
      <airport>LUX</airport>
      <belt>3</belt>
      <status code="A" time="2024-06-14T07:10:00Z"/>
    </flight>
    <flight uniqueID="1004">
      <airline>SK</airline>
      <flight_id>SK4035</flight_id>
      <dom_int>D</dom_int>
      <schedule_time>2024-06-14T10:00:00Z</schedule_time>
      <arr_dep>D</arr_dep>
      <airport>BGO</airport>
      <status code="C"/>
    </flight>
  </flights>
</airport>
"""

AIRLINES_XML = """<?xml version="1.0" encoding="utf-8"?>
<airlineNames>
  <airlineName code="DY" name="Norwegian"/>
  <airlineName code="cv" name="Cargolux Airlines International"/>
  <airlineName code="SK" name="SAS"/>
  <airlineName code="QR" name="Qatar Airways"/>
</airlineNames>
"""


@pytest.fixture
def flights_xml() -> str:
    return FLIGHTS_XML


@pytest.fixture
def airlines_xml() -> str:
    return AIRLINES_XML


@pytest.fixture
def rule() -> CargoMatchRule:
    """The default cargo rule, independent of environment overrides."""
    return CargoMatchRule.from_lists(
        ["UPS", "5X", "BCS", "ES", "QY", "D0", "APF", "HP", "QAF", "Q7", "QR"],
        ["cargo", "dhl", "ups", "amapola", "qatar", "freight", "postal"],
    )


@pytest.fixture
def classifier(rule) -> CargoClassifier:
    return CargoClassifier(rule)


@pytest.fixture
def directory() -> AirlineDirectory:
    return AirlineDirectory([
        ("DY", "Norwegian"),
        ("CV", "Cargolux Airlines International"),
        ("SK", "SAS"),
    ])


@pytest.fixture
def make_flight():
    """Factory for FlightRecords with sensible defaults."""
    def _make(**overrides) -> FlightRecord:
        fields = {
            "airline": "QR",
            "flight_id": "QR123",
            "schedule_time": "2024-06-14T08:45:00Z",
            "direction": "A",
            "other_airport": "DOH",
        }
        fields.update(overrides)
        return FlightRecord(**fields)
    return _make


class StubClient:
    """Feed client returning fixed payloads, or raising the given errors."""

    def __init__(self, flights=FLIGHTS_XML, airlines=AIRLINES_XML):
        self.flights = flights
        self.airlines = airlines
        self.calls = []

    def fetch_flights(self):
        self.calls.append("flights")
        if isinstance(self.flights, Exception):
            raise self.flights
        return self.flights

    def fetch_airline_names(self):
        self.calls.append("airlines")
        if isinstance(self.airlines, Exception):
            raise self.airlines
        return self.airlines


class StubPipeline:
    """Pipeline returning queued results (or raising queued errors) in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)

    def run(self) -> PipelineResult:
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def stub_pipeline():
    return StubPipeline
