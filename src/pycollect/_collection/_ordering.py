from __future__ import annotations

import logging
import random as _random
from collections.abc import Callable
from typing import TYPE_CHECKING, Self

from .._errors import EmptyCollectionError
from ._common import CommonMethods, keyed_getter, value_getter

if TYPE_CHECKING:
    from .._types import Pairs, SupportsRichComparison
    from ._eager import Collection

logger = logging.getLogger(__name__)


class BaseOrdering[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def sort(self, key: Callable[[V], SupportsRichComparison] | None = None) -> Self:
        """Sort by the natural ordering of the values, or by `key(value)`.

        The sort is stable: equal elements keep their relative order.

        Keys are preserved on associative collections, and renumbered on sequential ones.

        On a `LazyCollection` the upstream is fully pulled when the result is pulled.

        Args:
            key (Callable[[V], SupportsRichComparison] | None): Computes the sort key of a value. Defaults to None.

        Returns:
            Self: A new sorted collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([3, 1, 2]).sort()
        Collection([1, 2, 3])
        >>> pcl.collect({"b": 2, "a": 3, "c": 1}).sort()
        Collection({'c': 1, 'b': 2, 'a': 3})
        >>> pcl.collect(["pear", "fig", "kiwi"]).sort(len)
        Collection(['fig', 'pear', 'kiwi'])

        ```
        """
        getter = value_getter(key)

        def _sort(pairs: Pairs[K, V]) -> list[tuple[K, V]]:
            return sorted(pairs, key=lambda pair: getter(pair[1]))

        return self._keep_keys(_sort)  # type: ignore[return-value]

    def sort_desc(self, key: Callable[[V], SupportsRichComparison] | None = None) -> Self:
        """Sort in descending order, keeping equal elements in their relative order.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([3, 1, 2]).sort_desc()
        Collection([3, 2, 1])

        ```
        """
        getter = value_getter(key)

        def _sort_desc(pairs: Pairs[K, V]) -> list[tuple[K, V]]:
            return sorted(pairs, key=lambda pair: getter(pair[1]), reverse=True)

        return self._keep_keys(_sort_desc)  # type: ignore[return-value]

    def sort_by(
        self,
        key_or_fn: Callable[[V, K], SupportsRichComparison] | str | int,
        *,
        descending: bool = False,
    ) -> Self:
        """Stable sort by a field, a dotted path, or `func(value, key)`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> staff = pcl.collect([{"name": "Rama", "age": 30}, {"name": "John", "age": 25}])
        >>> staff.sort_by("age").pluck("name").all()
        ['John', 'Rama']
        >>> staff.sort_by("age", descending=True).pluck("name").all()
        ['Rama', 'John']

        ```
        """
        getter = keyed_getter(key_or_fn)

        def _sort_by(pairs: Pairs[K, V]) -> list[tuple[K, V]]:
            return sorted(pairs, key=lambda pair: getter(pair[1], pair[0]), reverse=descending)

        return self._keep_keys(_sort_by)  # type: ignore[return-value]

    def sort_keys(self, *, descending: bool = False) -> Self:
        """Order the entries by key.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"b": 1, "c": 2, "a": 3}).sort_keys()
        Collection({'a': 3, 'b': 1, 'c': 2})

        ```
        """

        def _sort_keys(pairs: Pairs[K, V]) -> list[tuple[K, V]]:
            return sorted(pairs, key=lambda pair: pair[0], reverse=descending)  # type: ignore[arg-type, return-value]

        return self._keep_keys(_sort_keys)  # type: ignore[return-value]

    def reverse(self) -> Self:
        """Reverse the order of the entries.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).reverse()
        Collection([3, 2, 1])
        >>> pcl.collect({"a": 1, "b": 2}).reverse()
        Collection({'b': 2, 'a': 1})

        ```
        """

        def _reverse(pairs: Pairs[K, V]) -> list[tuple[K, V]]:
            return list(pairs)[::-1]

        return self._keep_keys(_reverse)  # type: ignore[return-value]

    def random(
        self, n: int | None = None, state: int | _random.Random | None = None
    ) -> V | Collection[int, V]:
        """Pick one element uniformly at random, or **n** distinct elements.

        The seed in use is logged at `DEBUG` level, so that a draw can be reproduced.

        Args:
            n (int | None): Number of elements to draw. Defaults to None, returning a single value.
            state (int | random.Random | None): A seed or a `random.Random` instance. Defaults to None, drawing a fresh seed.

        Returns:
            V | Collection[int, V]: The picked value, or a sequential collection of **n** values when **n** is given.

        Raises:
            EmptyCollectionError: If the collection is empty.
            ValueError: If **n** is negative or larger than the number of elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect(range(1, 10))
        >>> data.random(state=42) in data
        True
        >>> data.random(3, state=42) == data.random(3, state=42)
        True
        >>> data.random(3, state=42).count()
        3

        ```
        """
        from ._eager import Collection

        values: list[V] = list(self)
        if not values:
            msg = "random element of an empty collection"
            raise EmptyCollectionError(msg)
        if n is not None and not 0 <= n <= len(values):
            msg = f"cannot draw {n} elements from a collection of {len(values)}"
            raise ValueError(msg)
        rng = _into_rng(state)
        if n is None:
            return rng.choice(values)
        return Collection(rng.sample(values, n))


def _into_rng(state: int | _random.Random | None) -> _random.Random:
    match state:
        case _random.Random():
            logger.debug("sampling with a caller supplied random generator")
            return state
        case None:
            seed = _random.getrandbits(32)
        case _:
            seed = state
    logger.debug("sampling with seed %d", seed)
    return _random.Random(seed)
