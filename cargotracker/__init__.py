"""
Cargo Flight Board Package.

Oslo cargo flight board built with Flask, requests and BeautifulSoup.

Modules:
    api/             REST endpoints for the board and manual refresh
    models/          Flight records, airline directory, cargo match rule
    ingestion/       Avinor feed client, XML parsers and the load pipeline
    classification/  Cargo operator classification
    display/         Local-time/status formatting and table rows
    board.py         Thread-safe holder of the displayed board
    config.py        Centralized configuration from environment variables
"""

__version__ = '1.0.0'
