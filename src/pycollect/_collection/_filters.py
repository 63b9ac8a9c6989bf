from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, Self

import cytoolz as cz

from ._common import CommonMethods, as_predicate, data_get, keyed_getter

if TYPE_CHECKING:
    from .._types import Pairs


class BaseFilter[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def filter(self, predicate: Callable[[V, K], bool] | None = None) -> Self:
        """Keep the elements for which `predicate(value, key)` is truthy.

        Keys are preserved on associative collections, and renumbered on sequential ones.

        Args:
            predicate (Callable[[V, K], bool] | None): Called with `(value, key)`. Defaults to None, keeping truthy values.

        Returns:
            Self: A new collection of the kept elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> scores = pcl.collect({"Rama": 100, "John": 80, "Sam": 90})
        >>> scores.filter(lambda score, _: score >= 90)
        Collection({'Rama': 100, 'Sam': 90})
        >>> pcl.collect(range(1, 11)).filter(lambda value, _: value % 2 == 0)
        Collection([2, 4, 6, 8, 10])
        >>> pcl.collect([0, 1, None, "", "a"]).filter()
        Collection([1, 'a'])

        ```
        """
        check = predicate if predicate is not None else (lambda value, _: bool(value))

        def _filter(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return ((k, v) for k, v in pairs if check(v, k))

        return self._keep_keys(_filter)  # type: ignore[return-value]

    def reject(self, predicate: Callable[[V, K], bool]) -> Self:
        """Drop the elements for which `predicate(value, key)` is truthy.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3, 4]).reject(lambda value, _: value % 2 == 0)
        Collection([1, 3])

        ```
        """

        def _reject(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return ((k, v) for k, v in pairs if not predicate(v, k))

        return self._keep_keys(_reject)  # type: ignore[return-value]

    def where(self, field: str | int, value: object) -> Self:
        """Keep the elements whose **field** equals **value**.

        Args:
            field (str | int): Key, position, attribute or dotted path read from each element.
            value (object): Value compared by equality.

        Returns:
            Self: A new collection of the matching elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> staff = pcl.collect([{"name": "Rama", "dept": "IT"}, {"name": "John", "dept": "HR"}])
        >>> staff.where("dept", "HR").all()
        [{'name': 'John', 'dept': 'HR'}]

        ```
        """
        return self.filter(lambda element, _: data_get(element, field) == value)

    def unique(
        self, key_or_fn: Callable[[V, K], Any] | str | int | None = None
    ) -> Self:
        """Keep the first occurrence of each distinct element.

        Unhashable values are supported, at the cost of a slower comparison.

        Args:
            key_or_fn (Callable[[V, K], Any] | str | int | None): Field or `(value, key)` callable computing the identity of an element. Defaults to None, the value itself.

        Returns:
            Self: A new collection without duplicates.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 1, 3, 2]).unique()
        Collection([1, 2, 3])
        >>> pcl.collect(["cat", "mouse", "dog", "hen"]).unique(lambda word, _: len(word))
        Collection(['cat', 'mouse'])

        ```
        """
        getter = keyed_getter(key_or_fn)

        def _unique(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            hashable: set[Any] = set()
            unhashable: list[Any] = []
            for k, v in pairs:
                identity = getter(v, k)
                try:
                    if identity in hashable:
                        continue
                    hashable.add(identity)
                except TypeError:
                    if identity in unhashable:
                        continue
                    unhashable.append(identity)
                yield k, v

        return self._keep_keys(_unique)  # type: ignore[return-value]

    def take(self, n: int) -> Self:
        """Take the first **n** elements, or the last `abs(n)` ones if **n** is negative.

        With a non-negative **n**, at most **n** elements are pulled from upstream, which makes it safe on infinite `LazyCollection`s.

        Args:
            n (int): Number of elements to take.

        Returns:
            Self: A new collection of at most `abs(n)` elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect(range(1, 10))
        >>> data.take(3)
        Collection([1, 2, 3])
        >>> data.take(-2)
        Collection([8, 9])
        >>> pcl.LazyCollection.from_count().take(10).all()
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 9]

        ```
        """

        def _take(pairs: Pairs[K, V]) -> Iterable[tuple[K, V]]:
            if n >= 0:
                return cz.itertoolz.take(n, pairs)
            return cz.itertoolz.tail(-n, pairs)

        return self._keep_keys(_take)  # type: ignore[return-value]

    def take_while(self, value_or_predicate: Callable[[V, K], bool] | object) -> Self:
        """Take elements from the start as long as `predicate(value, key)` holds.

        The first element breaking the condition is excluded, and nothing after it is pulled.

        A non-callable argument is compared to each value by equality.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 10)).take_while(lambda value, _: value < 3)
        Collection([1, 2])

        ```
        """
        predicate = as_predicate(value_or_predicate)

        def _take_while(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return itertools.takewhile(lambda pair: predicate(pair[1], pair[0]), pairs)

        return self._keep_keys(_take_while)  # type: ignore[return-value]

    def take_until(self, value_or_predicate: Callable[[V, K], bool] | object) -> Self:
        """Take elements from the start until `predicate(value, key)` holds.

        The first element satisfying the condition is excluded, and nothing after it is pulled.

        A non-callable argument is compared to each value by equality.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect(range(1, 10))
        >>> data.take_until(lambda value, _: value == 3)
        Collection([1, 2])
        >>> data.take_until(5)
        Collection([1, 2, 3, 4])

        ```
        """
        predicate = as_predicate(value_or_predicate)

        def _take_until(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return itertools.takewhile(lambda pair: not predicate(pair[1], pair[0]), pairs)

        return self._keep_keys(_take_until)  # type: ignore[return-value]

    def skip(self, n: int) -> Self:
        """Drop the first **n** elements.

        Args:
            n (int): Number of elements to drop.

        Returns:
            Self: A new collection of the remaining elements.

        Raises:
            ValueError: If **n** is negative.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 10)).skip(3)
        Collection([4, 5, 6, 7, 8, 9])
        >>> pcl.collect({"a": 1, "b": 2, "c": 3}).skip(1)
        Collection({'b': 2, 'c': 3})

        ```
        """
        if n < 0:
            msg = f"cannot skip a negative number of elements, got {n}"
            raise ValueError(msg)

        def _skip(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return cz.itertoolz.drop(n, pairs)

        return self._keep_keys(_skip)  # type: ignore[return-value]

    def skip_while(self, value_or_predicate: Callable[[V, K], bool] | object) -> Self:
        """Drop elements from the start as long as `predicate(value, key)` holds, keep the rest.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 10)).skip_while(lambda value, _: value < 3)
        Collection([3, 4, 5, 6, 7, 8, 9])

        ```
        """
        predicate = as_predicate(value_or_predicate)

        def _skip_while(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return itertools.dropwhile(lambda pair: predicate(pair[1], pair[0]), pairs)

        return self._keep_keys(_skip_while)  # type: ignore[return-value]

    def skip_until(self, value_or_predicate: Callable[[V, K], bool] | object) -> Self:
        """Drop elements from the start until `predicate(value, key)` holds, keep the rest.

        The first element satisfying the condition is kept.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 10)).skip_until(lambda value, _: value == 3)
        Collection([3, 4, 5, 6, 7, 8, 9])

        ```
        """
        predicate = as_predicate(value_or_predicate)

        def _skip_until(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return itertools.dropwhile(lambda pair: not predicate(pair[1], pair[0]), pairs)

        return self._keep_keys(_skip_until)  # type: ignore[return-value]

    def slice(self, offset: int, length: int | None = None) -> Self:
        """Return the elements from position **offset**, at most **length** of them.

        A negative **offset** counts from the end, a negative **length** stops that many elements before the end.

        An out of range **offset** gives an empty collection, never an error.

        With non-negative arguments the upstream is not pulled past the requested window.

        Args:
            offset (int): Starting position.
            length (int | None): Maximum number of elements. Defaults to None, up to the end.

        Returns:
            Self: A new collection of the selected elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect(range(1, 10))
        >>> data.slice(3)
        Collection([4, 5, 6, 7, 8, 9])
        >>> data.slice(3, 2)
        Collection([4, 5])
        >>> data.slice(-5, -2)
        Collection([5, 6, 7])
        >>> data.slice(20)
        Collection([])

        ```
        """

        def _slice(pairs: Pairs[K, V]) -> Iterable[tuple[K, V]]:
            if offset >= 0 and (length is None or length >= 0):
                stop = None if length is None else offset + length
                return itertools.islice(pairs, offset, stop)
            materialized = list(pairs)
            if length is None:
                return materialized[offset:]
            if length >= 0:
                return materialized[offset:][:length]
            return materialized[offset:length]

        return self._keep_keys(_slice)  # type: ignore[return-value]
