"""
API module for the cargo flight board.

Provides REST endpoints for:
- Current cargo flight board
- Manual refresh
"""

from cargotracker.api.flights import flights_bp

__all__ = ['flights_bp']
