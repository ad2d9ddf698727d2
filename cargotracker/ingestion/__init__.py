"""
Data ingestion module for the cargo flight board.

Handles fetching the Avinor flight and airline-name feeds, parsing the
XML payloads, and running the fetch/parse/filter/sort pipeline.
"""

from cargotracker.ingestion.avinor_client import AvinorClient
from cargotracker.ingestion.pipeline import CargoFlightPipeline, PipelineResult

__all__ = ['AvinorClient', 'CargoFlightPipeline', 'PipelineResult']
