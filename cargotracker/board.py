"""
Flight board - the currently displayed result of the cargo pipeline.

Holds one BoardView that the web layer renders. Each load moves through:

    IDLE -> LOADING -> RENDERED | FAILED

A load never reuses data from an earlier one. Loads may overlap (initial
load plus a manual refresh, or two quick refreshes); each is stamped with
a generation number and a completion older than the last published view
is discarded instead of overwriting it.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from cargotracker.config import config
from cargotracker.display import LOADING_MESSAGE, BoardRow, build_rows, error_row, placeholder_row
from cargotracker.errors import FeedError
from cargotracker.ingestion import CargoFlightPipeline

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Lifecycle of one board load."""
    IDLE = 'idle'
    LOADING = 'loading'
    RENDERED = 'rendered'
    FAILED = 'failed'


@dataclass
class BoardView:
    """
    What the board shows right now.

    ``rows`` always holds at least one row: flights, or a single
    placeholder for the loading, empty and error states.
    """
    state: LoadState
    rows: List[BoardRow]
    flight_count: int = 0
    total_flights: int = 0
    error: Optional[str] = None
    generation: int = 0
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'state': self.state.value,
            'rows': [row.to_dict() for row in self.rows],
            'count': self.flight_count,
            'total_flights': self.total_flights,
            'error': self.error,
            'updated_at': self.updated_at.isoformat(),
        }


def _idle_view() -> BoardView:
    return BoardView(state=LoadState.IDLE, rows=[placeholder_row(LOADING_MESSAGE)])


class FlightBoard:
    """
    Thread-safe holder for the displayed board.

    ``refresh()`` is the single entry point for both the initial load and
    manual refreshes.
    """

    def __init__(
        self,
        pipeline: Optional[CargoFlightPipeline] = None,
        timezone_name: Optional[str] = None,
    ):
        self.pipeline = pipeline or CargoFlightPipeline()
        self.timezone_name = timezone_name or config.display.timezone

        self._view = _idle_view()
        self._lock = threading.RLock()
        self._generation = 0
        self._published_generation = 0

        # Statistics
        self._load_count = 0
        self._error_count = 0
        self._stale_count = 0

    @property
    def view(self) -> BoardView:
        with self._lock:
            return self._view

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._load_count += 1
            self._view = BoardView(
                state=LoadState.LOADING,
                rows=[placeholder_row(LOADING_MESSAGE)],
                generation=generation,
            )
        return generation

    def _publish(self, view: BoardView) -> bool:
        """Publish ``view`` unless a newer load has already been published."""
        with self._lock:
            if view.generation < self._published_generation:
                self._stale_count += 1
                logger.debug(
                    f'Discarding stale load #{view.generation} '
                    f'(showing #{self._published_generation})'
                )
                return False
            self._view = view
            self._published_generation = view.generation
            return True

    def refresh(self) -> BoardView:
        """
        Run the pipeline once and publish the outcome.

        Any failure, from the feeds or while rendering, ends in the FAILED
        state with a single error row; it is not raised. Returns the view
        produced by this load, which may not be the one displayed if a
        newer load finished first.
        """
        generation = self._begin()
        logger.info(f'Loading cargo flights (load #{generation})')

        try:
            result = self.pipeline.run()
            view = BoardView(
                state=LoadState.RENDERED,
                rows=build_rows(result.flights, result.directory, self.timezone_name),
                flight_count=len(result.flights),
                total_flights=result.total_flights,
                generation=generation,
            )
        except FeedError as e:
            logger.error(f'Load #{generation} failed: {e}')
            view = self._failed_view(e, generation)
        except Exception as e:
            logger.exception(f'Load #{generation} failed unexpectedly: {e}')
            view = self._failed_view(e, generation)

        self._publish(view)
        return view

    def _failed_view(self, error: Exception, generation: int) -> BoardView:
        with self._lock:
            self._error_count += 1
        return BoardView(
            state=LoadState.FAILED,
            rows=[error_row(error)],
            error=str(error),
            generation=generation,
        )

    def start_background_refresh(self) -> threading.Thread:
        """Start a load in a background thread (used for the initial load)."""
        thread = threading.Thread(target=self.refresh, name='board-refresh', daemon=True)
        thread.start()
        logger.info('Background load started')
        return thread

    @property
    def stats(self) -> dict:
        """Get board statistics."""
        with self._lock:
            return {
                'state': self._view.state.value,
                'load_count': self._load_count,
                'error_count': self._error_count,
                'stale_discarded': self._stale_count,
                'generation': self._published_generation,
            }
