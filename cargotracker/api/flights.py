"""
Cargo flight API endpoints.

Provides endpoints for:
- GET /api/flights - Current board (state plus display rows)
- POST /api/flights/refresh - Reload both feeds and return the new board
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from cargotracker.display import COLUMNS

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _board_response(view, start_time: float):
    query_time_ms = (time.perf_counter() - start_time) * 1000

    payload = view.to_dict()
    payload.update({
        'columns': list(COLUMNS),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })
    return jsonify(payload)


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    Return the board as currently displayed.

    Does not fetch; the board changes only on the initial load and on
    refresh.
    """
    start_time = time.perf_counter()
    board = current_app.config['FLIGHT_BOARD']
    return _board_response(board.view, start_time)


@flights_bp.route('/refresh', methods=['POST'])
def refresh_flights():
    """
    Fetch both feeds again and return the resulting board.

    Feed failures are reported in the body (state 'failed') with a 200
    status, matching what the HTML board shows.
    """
    start_time = time.perf_counter()
    board = current_app.config['FLIGHT_BOARD']
    view = board.refresh()
    logger.debug(f'Refresh via API finished in state {view.state.value}')
    return _board_response(view, start_time)
