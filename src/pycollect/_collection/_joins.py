from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from .._errors import LengthMismatchError
from ._common import CommonMethods, data_get, into_factory, sub_values

if TYPE_CHECKING:
    from .._types import Pairs
    from ._eager import Collection


class BaseJoins[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def values(self) -> CommonMethods[int, V]:
        """Drop the keys and number the values from zero.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"Rama": 100, "John": 80}).values()
        Collection([100, 80])

        ```
        """

        def _values(pairs: Pairs[K, V]) -> Iterator[V]:
            return (v for _, v in pairs)

        return self._new_values(_values)

    def keys(self) -> CommonMethods[int, K]:
        """Return the keys as a sequential collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"Rama": 100, "John": 80}).keys()
        Collection(['Rama', 'John'])

        ```
        """

        def _keys(pairs: Pairs[K, V]) -> Iterator[K]:
            return (k for k, _ in pairs)

        return self._new_values(_keys)

    def zip(self, *others: Iterable[Any]) -> CommonMethods[int, Collection[int, Any]]:
        """Pair values by position with the values of one or more other sources.

        The result is as long as the shortest input.

        Each row is a sequential `Collection` holding one value from each input.

        Args:
            *others (Iterable[Any]): Iterables, mappings (their values are used) or collections.

        Returns:
            CommonMethods[int, Collection[int, Any]]: A sequential collection of rows.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(["Rama", "John"]).zip([100, 80])
        Collection([Collection(['Rama', 100]), Collection(['John', 80])])
        >>> pcl.collect([1, 2, 3]).zip({"a": "x", "b": "y"}).map(lambda row, _: row.all()).all()
        [[1, 'x'], [2, 'y']]

        ```
        """
        from ._eager import Collection

        def _zip(pairs: Pairs[K, V]) -> Iterator[Collection[int, Any]]:
            columns = [sub_values(other) for other in others]
            return (Collection(row) for row in zip((v for _, v in pairs), *columns))

        return self._new_values(_zip)

    def concat(self, other: Iterable[Any]) -> CommonMethods[int, Any]:
        """Append the values of **other** after the values of this one, renumbering all of them.

        Args:
            other (Iterable[Any]): An iterable, a mapping (its values are used) or a collection.

        Returns:
            CommonMethods[int, Any]: A new sequential collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"a": 1}).concat([2, 3])
        Collection([1, 2, 3])
        >>> pcl.collect([1]).concat({"x": 2})
        Collection([1, 2])

        ```
        """
        factory, _ = into_factory(other)

        def _concat(pairs: Pairs[K, V]) -> Iterator[Any]:
            return itertools.chain((v for _, v in pairs), (v for _, v in factory()))

        return self._new_values(_concat)

    def combine[R](self, values: Iterable[R]) -> CommonMethods[V, R]:
        """Use the values of this collection as keys for the given **values**, position by position.

        Both sides are materialized before anything is produced.

        Args:
            values (Iterable[R]): The new values, an iterable, a mapping (its values are used) or a collection.

        Returns:
            CommonMethods[V, R]: A new associative collection.

        Raises:
            LengthMismatchError: If both sides do not have the same number of elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(["name", "dept"]).combine(["Rama", "IT"])
        Collection({'name': 'Rama', 'dept': 'IT'})
        >>> pcl.collect(["name", "dept"]).combine(["Rama"])
        Traceback (most recent call last):
            ...
        pycollect._errors.LengthMismatchError: cannot combine 2 keys with 1 values

        ```
        """
        factory, _ = into_factory(values)

        def _combine(pairs: Pairs[K, V]) -> Iterator[tuple[V, R]]:
            new_keys = [v for _, v in pairs]
            new_values = [v for _, v in factory()]
            if len(new_keys) != len(new_values):
                msg = f"cannot combine {len(new_keys)} keys with {len(new_values)} values"
                raise LengthMismatchError(msg)
            return zip(new_keys, new_values, strict=True)

        return self._new_keys(_combine)

    def flip(self) -> CommonMethods[V, K]:
        """Swap keys and values; the last key wins when values repeat.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"Rama": "IT", "John": "HR"}).flip()
        Collection({'IT': 'Rama', 'HR': 'John'})
        >>> pcl.collect(["a", "b"]).flip()
        Collection({'a': 0, 'b': 1})

        ```
        """

        def _flip(pairs: Pairs[K, V]) -> Iterator[tuple[V, K]]:
            return ((v, k) for k, v in pairs)

        return self._new_keys(_flip)

    def pluck(self, field: str | int, key: str | int | None = None) -> CommonMethods[Any, Any]:
        """Extract a **field** from every element, optionally keyed by another **key** field.

        Args:
            field (str | int): Key, position, attribute or dotted path of the extracted value.
            key (str | int | None): Field used as key of the result. Defaults to None, giving a sequential collection.

        Returns:
            CommonMethods[Any, Any]: A sequential collection, or an associative one when **key** is given.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> staff = pcl.collect([{"id": 7, "name": "Rama"}, {"id": 9, "name": "John"}])
        >>> staff.pluck("name")
        Collection(['Rama', 'John'])
        >>> staff.pluck("name", key="id")
        Collection({7: 'Rama', 9: 'John'})

        ```
        """
        if key is None:

            def _pluck(pairs: Pairs[K, V]) -> Iterator[Any]:
                return (data_get(v, field) for _, v in pairs)

            return self._new_values(_pluck)

        def _pluck_keyed(pairs: Pairs[K, V]) -> Iterator[tuple[Any, Any]]:
            return ((data_get(v, key), data_get(v, field)) for _, v in pairs)

        return self._new_keys(_pluck_keyed)
