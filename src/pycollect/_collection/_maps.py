from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from ._common import CommonMethods, nested_values

if TYPE_CHECKING:
    from .._types import Pairs


class BaseMap[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def map[R](self, func: Callable[[V, K], R]) -> CommonMethods[K, R]:
        """Transform each value with `func(value, key)`, one to one.

        Keys are preserved.

        Args:
            func (Callable[[V, K], R]): Function called with `(value, key)`.

        Returns:
            CommonMethods[K, R]: A new collection of the results.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).map(lambda value, _: value * 2)
        Collection([2, 4, 6])
        >>> pcl.collect({"a": 1, "b": 2}).map(lambda value, key: f"{key}={value}")
        Collection({'a': 'a=1', 'b': 'b=2'})

        ```
        """

        def _map(pairs: Pairs[K, V]) -> Iterator[tuple[K, R]]:
            return ((k, func(v, k)) for k, v in pairs)

        return self._keep_keys(_map)

    def map_into[R](self, cls: Callable[[V], R]) -> CommonMethods[K, R]:
        """Lift each value into `cls(value)`.

        Args:
            cls (Callable[[V], R]): A class, or any one-argument factory.

        Returns:
            CommonMethods[K, R]: A new collection of the constructed instances.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> from fractions import Fraction
        >>> pcl.collect(["1/2", "3/4"]).map_into(Fraction).all()
        [Fraction(1, 2), Fraction(3, 4)]

        ```
        """

        def _map_into(pairs: Pairs[K, V]) -> Iterator[tuple[K, R]]:
            return ((k, cls(v)) for k, v in pairs)

        return self._keep_keys(_map_into)

    def map_spread[R](self, func: Callable[..., R]) -> CommonMethods[K, R]:
        """Unpack each value, a fixed-size sequence, as positional arguments of **func**.

        Args:
            func (Callable[..., R]): Called as `func(*value)`.

        Returns:
            CommonMethods[K, R]: A new collection of the results.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([("Rama", "Perdana"), ("Name", "Less")]).map_spread(
        ...     lambda first, last: f"{first} {last}"
        ... ).all()
        ['Rama Perdana', 'Name Less']

        ```
        """

        def _map_spread(pairs: Pairs[K, V]) -> Iterator[tuple[K, R]]:
            return ((k, func(*v)) for k, v in pairs)  # type: ignore[misc]

        return self._keep_keys(_map_spread)

    def map_with_keys[KR, VR](
        self, func: Callable[[V, K], Mapping[KR, VR]]
    ) -> CommonMethods[KR, VR]:
        """Build an associative collection from the mappings returned by `func(value, key)`.

        Later keys overwrite earlier ones once materialized.

        Args:
            func (Callable[[V, K], Mapping[KR, VR]]): Returns the new entries for one element, usually a single one.

        Returns:
            CommonMethods[KR, VR]: A new associative collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> users = pcl.collect([{"id": 7, "name": "Rama"}, {"id": 9, "name": "John"}])
        >>> users.map_with_keys(lambda user, _: {user["id"]: user["name"]})
        Collection({7: 'Rama', 9: 'John'})

        ```
        """

        def _map_with_keys(pairs: Pairs[K, V]) -> Iterator[tuple[KR, VR]]:
            return itertools.chain.from_iterable(func(v, k).items() for k, v in pairs)

        return self._new_keys(_map_with_keys)

    def flat_map[R](self, func: Callable[[V, K], Iterable[R]]) -> CommonMethods[int, R]:
        """Map each element to a sub-sequence with `func(value, key)` and concatenate them.

        The result is re-indexed sequentially.

        Args:
            func (Callable[[V, K], Iterable[R]]): Returns an iterable, a mapping (its values are used) or a collection. Strings, bytes and scalars contribute nothing.

        Returns:
            CommonMethods[int, R]: A new sequential collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> people = pcl.collect([
        ...     {"name": "Rama", "hobbies": ["Coding", "Gaming"]},
        ...     {"name": "Perdana", "hobbies": ["Reading", "Writing"]},
        ... ])
        >>> people.flat_map(lambda person, _: person["hobbies"]).all()
        ['Coding', 'Gaming', 'Reading', 'Writing']

        ```
        """

        def _flat_map(pairs: Pairs[K, V]) -> Iterator[R]:
            return itertools.chain.from_iterable(nested_values(func(v, k)) for k, v in pairs)

        return self._new_values(_flat_map)

    def collapse(self) -> CommonMethods[int, Any]:
        """Concatenate values that are themselves sequences, one level deep.

        Strings, bytes and other values that are not collections are skipped.

        The result is re-indexed sequentially.

        Returns:
            CommonMethods[int, Any]: A new sequential collection.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([[1, 2, 3], [4, 5, 6], [7, [8, 9]]]).collapse().all()
        [1, 2, 3, 4, 5, 6, 7, [8, 9]]

        ```
        """

        def _collapse(pairs: Pairs[K, V]) -> Iterator[Any]:
            return itertools.chain.from_iterable(nested_values(v) for _, v in pairs)

        return self._new_values(_collapse)
