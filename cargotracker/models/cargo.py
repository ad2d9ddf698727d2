"""
CargoMatchRule - static configuration for cargo operator classification.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple


@dataclass(frozen=True)
class CargoMatchRule:
    """
    Which carriers count as cargo operators.

    codes: carrier codes treated as cargo unconditionally (uppercase)
    keywords: lowercase substrings matched against the airline name
    """
    codes: FrozenSet[str]
    keywords: Tuple[str, ...]

    @classmethod
    def from_lists(cls, codes: Iterable[str], keywords: Iterable[str]) -> 'CargoMatchRule':
        """Build a rule, normalizing codes to uppercase and keywords to lowercase."""
        return cls(
            codes=frozenset(code.strip().upper() for code in codes if code.strip()),
            keywords=tuple(kw.strip().lower() for kw in keywords if kw.strip()),
        )
