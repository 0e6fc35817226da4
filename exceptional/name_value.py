# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Ordered, duplicate-tolerant name/value collections and their pair codec.

Request data such as query strings, form posts and server variables may
legitimately repeat a name (``?a=1&a=2``), and the order of the entries
matters when the request is displayed again. A plain ``dict`` would drop
the repeats, so the record keeps these collections as ordered pair lists
and serializes them as a list of ``{"name": ..., "value": ...}`` objects.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping


@dataclass(frozen=True)
class NameValuePair:
    """A single entry of a NameValueCollection."""

    name: str
    value: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NameValuePair":
        return cls(name=data.get("name"), value=data.get("value"))


class NameValueCollection:
    """Ordered multi-map of string names to string values.

    Adding a name that is already present appends another entry rather than
    replacing the existing one.
    """

    def __init__(self, source: "NameValueCollection | Mapping[str, Any] | Iterable[Any] | None" = None):
        """Initialize the collection.

        Args:
            source: Optional initial content. Another collection, a mapping or
                an iterable of pairs (NameValuePair, 2-tuples or dicts).
        """
        self._pairs: list[NameValuePair] = []
        if source is None:
            return
        if isinstance(source, NameValueCollection):
            self._pairs = list(source._pairs)
        elif isinstance(source, Mapping):
            for name, value in source.items():
                self.add(name, value)
        else:
            self.extend(source)

    def add(self, name: str, value: str | None) -> None:
        """Append a value under ``name``."""
        self._pairs.append(NameValuePair(name, value))

    def extend(self, pairs: Iterable[Any]) -> None:
        """Append every pair from ``pairs`` in order."""
        for pair in pairs:
            self._pairs.append(_coerce_pair(pair))

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the last value added under ``name``."""
        for pair in reversed(self._pairs):
            if pair.name == name:
                return pair.value
        return default

    def get_all(self, name: str) -> list[str | None]:
        """Return every value stored under ``name`` in insertion order."""
        return [pair.value for pair in self._pairs if pair.name == name]

    def names(self) -> list[str]:
        """Return the distinct names in first-seen order."""
        return list(dict.fromkeys(pair.name for pair in self._pairs))

    def items(self) -> list[tuple[str, str | None]]:
        return [(pair.name, pair.value) for pair in self._pairs]

    def copy(self) -> "NameValueCollection":
        return NameValueCollection(self)

    def __iter__(self) -> Iterator[NameValuePair]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, name: object) -> bool:
        return any(pair.name == name for pair in self._pairs)

    def __getitem__(self, name: str) -> str | None:
        if name not in self:
            raise KeyError(name)
        return self.get(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameValueCollection):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"NameValueCollection({self.items()!r})"


def _coerce_pair(pair: Any) -> NameValuePair:
    if isinstance(pair, NameValuePair):
        return pair
    if isinstance(pair, Mapping):
        return NameValuePair.from_dict(pair)
    name, value = pair
    return NameValuePair(name, value)


def to_pairs(collection: NameValueCollection | None) -> list[NameValuePair]:
    """Project a collection onto an ordered pair list.

    An absent or empty collection yields an empty list.
    """
    if collection is None:
        return []
    return list(collection)


def from_pairs(pairs: Iterable[Any] | None) -> NameValueCollection:
    """Rebuild a collection from an ordered pair list, keeping repeated names."""
    result = NameValueCollection()
    if pairs is None:
        return result
    result.extend(pairs)
    return result


def to_json_dict(pairs: Iterable[Any] | None) -> dict[str, str | None]:
    """Flatten pairs into a plain dictionary for display.

    This projection is lossy: when a name repeats, the last value wins.
    """
    result: dict[str, str | None] = {}
    for pair in pairs or []:
        pair = _coerce_pair(pair)
        result[pair.name] = pair.value
    return result
