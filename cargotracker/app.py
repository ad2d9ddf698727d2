"""
Cargo flight board Flask application.

Main entry point for the web application. Initializes:
- Flight board (pipeline + displayed view)
- Initial background load
- API routes
- HTML board with a Refresh button

Usage:
    python -m cargotracker.app

Or with gunicorn:
    gunicorn 'cargotracker.app:create_app()'
"""

import logging
import os
from typing import Optional

from flask import Flask, current_app, redirect, render_template, url_for
from flask_cors import CORS

from cargotracker.api import flights_bp
from cargotracker.board import FlightBoard
from cargotracker.config import config
from cargotracker.display import COLUMNS

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(board: Optional[FlightBoard] = None, load_on_start: Optional[bool] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        board: Flight board to serve (built from config if None)
        load_on_start: Whether to start the initial load in the background.
                       Defaults to config; set to False for testing.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flights_bp)

    board = board or FlightBoard()
    app.config['FLIGHT_BOARD'] = board

    if load_on_start is None:
        load_on_start = config.load_on_start

    if load_on_start:
        board.start_background_refresh()
        logger.info(
            f'Initial load started for {config.feed.airport} '
            f'(-{config.feed.time_from_hours}h/+{config.feed.time_to_hours}h)'
        )

    # -------------------------------------------------------------------------
    # Frontend routes
    # -------------------------------------------------------------------------

    @app.route('/')
    def index():
        """Serve the cargo flight table."""
        view = current_app.config['FLIGHT_BOARD'].view
        return render_template(
            'index.html',
            view=view,
            columns=COLUMNS,
            airport=config.feed.airport,
            timezone=board.timezone_name,
        )

    @app.route('/refresh', methods=['POST'])
    def refresh():
        """Reload both feeds, then show the table again."""
        current_app.config['FLIGHT_BOARD'].refresh()
        return redirect(url_for('index'))

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok', 'board': current_app.config['FLIGHT_BOARD'].stats}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    # Get port from environment or default
    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting cargo flight board on http://localhost:{port}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,  # Reloader would start a second initial load
    )


if __name__ == '__main__':
    run_development_server()
