from __future__ import annotations

import statistics
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .._errors import EmptyCollectionError
from ._common import CommonMethods, value_getter

if TYPE_CHECKING:
    from .._types import SupportsRichComparison
    from ._eager import Collection


class BaseAgg[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def _measured(self, key: Callable[[V], Any] | str | int | None, operation: str) -> list[Any]:
        getter = value_getter(key)
        measured = [getter(v) for v in self]
        if not measured:
            msg = f"{operation} of an empty collection"
            raise EmptyCollectionError(msg)
        return measured

    def sum(self, key: Callable[[V], Any] | str | int | None = None) -> Any:
        """Return the sum of the values, or of a field / `func(value)` of each value.

        An empty collection sums to `0`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).sum()
        6
        >>> pcl.collect([{"price": 10}, {"price": 5}]).sum("price")
        15
        >>> pcl.collect([]).sum()
        0

        ```
        """
        getter = value_getter(key)
        return sum(getter(v) for v in self)

    def avg(self, key: Callable[[V], Any] | str | int | None = None) -> Any:
        """Return the arithmetic mean of the values, or of a field / `func(value)` of each value.

        Args:
            key (Callable[[V], Any] | str | int | None): What to average. Defaults to None, the values themselves.

        Returns:
            Any: The mean, as computed by `statistics.mean`.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3, 4]).avg()
        2.5
        >>> pcl.collect([{"score": 90}, {"score": 70}]).avg("score")
        80
        >>> pcl.collect([]).avg()
        Traceback (most recent call last):
            ...
        pycollect._errors.EmptyCollectionError: avg of an empty collection

        ```
        """
        return statistics.mean(self._measured(key, "avg"))

    def min(self, key: Callable[[V], SupportsRichComparison] | str | int | None = None) -> V:
        """Return the smallest value, compared directly or through a field / `func(value)`.

        The value itself is returned, not its measure. The first one wins on ties.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([3, 1, 2]).min()
        1
        >>> pcl.collect(["pear", "fig", "apple"]).min(len)
        'fig'

        ```
        """
        values = list(self)
        if not values:
            msg = "min of an empty collection"
            raise EmptyCollectionError(msg)
        return min(values, key=value_getter(key))

    def max(self, key: Callable[[V], SupportsRichComparison] | str | int | None = None) -> V:
        """Return the largest value, compared directly or through a field / `func(value)`.

        The value itself is returned, not its measure. The first one wins on ties.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([3, 1, 2]).max()
        3
        >>> pcl.collect([{"name": "Rama", "age": 30}, {"name": "John", "age": 41}]).max("age")["name"]
        'John'

        ```
        """
        values = list(self)
        if not values:
            msg = "max of an empty collection"
            raise EmptyCollectionError(msg)
        return max(values, key=value_getter(key))

    def median(self, key: Callable[[V], Any] | str | int | None = None) -> Any:
        """Return the median of the values, averaging the two middle ones for an even count.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([5, 1, 3]).median()
        3
        >>> pcl.collect([4, 1, 3, 2]).median()
        2.5

        ```
        """
        return statistics.median(self._measured(key, "median"))

    def mode(self, key: Callable[[V], Any] | str | int | None = None) -> Collection[int, Any]:
        """Return the most frequent values, in first-seen order.

        Returns:
            Collection[int, Any]: A sequential collection, holding several values on ties.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 2, 3, 3]).mode()
        Collection([2, 3])
        >>> pcl.collect(["a", "b", "a"]).mode()
        Collection(['a'])

        ```
        """
        from ._eager import Collection

        return Collection(statistics.multimode(self._measured(key, "mode")))

