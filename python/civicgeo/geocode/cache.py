"""In-memory key/value caches for resolved locations.

Entries never expire: the mapping from a fixed address or coordinate pair to
its counterpart is treated as constant for the life of the process.
``clear()`` is the only removal path.
"""
from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

V = TypeVar("V")

KeyNormalizer = Callable[[str], str]


def normalize_text_key(key: str) -> str:
    """Trim surrounding whitespace."""
    return key.strip()


def normalize_address_key(key: str) -> str:
    """Trim, collapse internal whitespace and case-fold an address."""
    return " ".join(key.split()).casefold()


class GeocodeCache(Generic[V]):
    """Dict-backed cache that normalises keys on every access.

    Callers may pass raw user input; equivalent inputs (``" Main St"`` and
    ``"main  st"`` under ``normalize_address_key``) share one entry.
    """

    def __init__(self, normalizer: KeyNormalizer = normalize_text_key) -> None:
        self._normalize = normalizer
        self._entries: dict[str, V] = {}

    def get(self, key: str, default: Optional[V] = None) -> Optional[V]:
        return self._entries.get(self._normalize(key), default)

    def set(self, key: str, value: V) -> None:
        self._entries[self._normalize(key)] = value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
