"""
AirlineDirectory - carrier code to display name lookup.

Built from the Avinor airline-name feed on every fetch cycle. Keys are
stored uppercase so lookups work regardless of the case used by either
feed.
"""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Optional, Tuple


class AirlineDirectory(Mapping):
    """
    Immutable mapping from uppercase carrier code to airline name.

    Usage:
        directory = AirlineDirectory([('dy', 'Norwegian')])
        directory['DY']          # 'Norwegian'
        directory.get('dy')      # 'Norwegian'
        directory.display_name('XX')  # 'XX' (falls back to the code)
    """

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()):
        names: Dict[str, str] = {}
        for code, name in entries:
            # Later duplicates overwrite earlier ones
            names[code.upper()] = name
        self._names = names

    def __getitem__(self, code: str) -> str:
        return self._names[code.upper()]

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f'AirlineDirectory({len(self._names)} airlines)'

    def get(self, code: Optional[str], default: Optional[str] = None) -> Optional[str]:
        if not code:
            return default
        return self._names.get(code.upper(), default)

    def display_name(self, code: str) -> str:
        """Resolved airline name, or the code itself when unknown."""
        return self.get(code) or code
