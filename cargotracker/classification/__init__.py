"""
Flight classification for the cargo board.

Decides which scheduled movements belong to cargo operators, using a
static code list plus airline-name keywords.
"""

from cargotracker.classification.cargo import CargoClassifier

__all__ = ['CargoClassifier']
