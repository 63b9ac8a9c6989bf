from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Protocol

type Pairs[K, V] = Iterator[tuple[K, V]]
"""A single-pass stream of entries, the unit every pipeline stage consumes and produces."""
type PairsFactory[K, V] = Callable[[], Iterable[tuple[K, V]]]
"""A zero-argument callable returning a fresh stream of entries each time it is called."""


class SupportsDunderLT[T](Protocol):
    def __lt__(self, other: T, /) -> bool: ...


class SupportsDunderGT[T](Protocol):
    def __gt__(self, other: T, /) -> bool: ...


type SupportsRichComparison[T] = SupportsDunderLT[T] | SupportsDunderGT[T]
