from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Final, Self

import cytoolz as cz
import more_itertools as mit

from ._common import CommonMethods, entries, keyed_getter

if TYPE_CHECKING:
    from .._types import Pairs
    from ._eager import Collection

_PAD: Final = object()


class BasePartitions[K, V](CommonMethods[K, V]):
    __slots__ = ()

    def chunk(self, size: int) -> CommonMethods[int, Collection[K, V]]:
        """Split into consecutive sub-collections of at most **size** elements.

        The last chunk may be shorter. Each chunk keeps the key mode of the source.

        On a `LazyCollection`, a chunk is only built when it is pulled.

        Args:
            size (int): Maximum number of elements per chunk.

        Returns:
            CommonMethods[int, Collection[K, V]]: A sequential collection of `Collection` chunks.

        Raises:
            ValueError: If **size** is lower than 1.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 8)).chunk(3)
        Collection([Collection([1, 2, 3]), Collection([4, 5, 6]), Collection([7])])
        >>> pcl.collect({"a": 1, "b": 2, "c": 3}).chunk(2).all()
        [Collection({'a': 1, 'b': 2}), Collection({'c': 3})]

        ```
        """
        from ._eager import Collection

        if size < 1:
            msg = f"chunk size must be at least 1, got {size}"
            raise ValueError(msg)
        sequential = self._sequential

        def _chunk(pairs: Pairs[K, V]) -> Iterator[Collection[K, V]]:
            return (
                Collection.from_entries(entries(batch, sequential=sequential), sequential=sequential)
                for batch in mit.chunked(pairs, size)
            )

        return self._new_values(_chunk)

    def sliding(self, size: int = 2, step: int = 1) -> CommonMethods[int, Collection[K, V]]:
        """Return windows of **size** consecutive elements, each starting **step** elements after the previous one.

        Incomplete trailing windows are dropped.

        Args:
            size (int): Number of elements per window. Defaults to 2.
            step (int): Distance between window starts. Defaults to 1.

        Returns:
            CommonMethods[int, Collection[K, V]]: A sequential collection of `Collection` windows.

        Raises:
            ValueError: If **size** or **step** is lower than 1.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3, 4, 5]).sliding(3).map(lambda window, _: window.sum()).all()
        [6, 9, 12]
        >>> pcl.collect([1, 2, 3, 4, 5]).sliding(2, step=2).map(lambda window, _: window.all()).all()
        [[1, 2], [3, 4]]

        ```
        """
        from ._eager import Collection

        if size < 1 or step < 1:
            msg = f"window size and step must be at least 1, got size={size}, step={step}"
            raise ValueError(msg)
        sequential = self._sequential

        def _sliding(pairs: Pairs[K, V]) -> Iterator[Collection[K, V]]:
            return (
                Collection.from_entries(entries(window, sequential=sequential), sequential=sequential)
                for window in mit.windowed(pairs, size, fillvalue=_PAD, step=step)
                if window and window[-1] is not _PAD
            )

        return self._new_values(_sliding)

    def partition(self, predicate: Callable[[V, K], bool]) -> tuple[Self, Self]:
        """Split into the elements satisfying `predicate(value, key)` and the others.

        Keys are preserved on associative collections, and renumbered on sequential ones.

        Args:
            predicate (Callable[[V, K], bool]): Called with `(value, key)`.

        Returns:
            tuple[Self, Self]: The `(matching, non_matching)` collections.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> passed, failed = pcl.collect({"Rama": 100, "John": 80, "Sam": 90}).partition(
        ...     lambda score, _: score >= 90
        ... )
        >>> passed
        Collection({'Rama': 100, 'Sam': 90})
        >>> failed
        Collection({'John': 80})

        ```
        """

        def _matching(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return ((k, v) for k, v in pairs if predicate(v, k))

        def _others(pairs: Pairs[K, V]) -> Iterator[tuple[K, V]]:
            return ((k, v) for k, v in pairs if not predicate(v, k))

        return self._keep_keys(_matching), self._keep_keys(_others)  # type: ignore[return-value]

    def group_by[G](
        self,
        key_or_fn: Callable[[V, K], G] | str | int,
        *,
        preserve_keys: bool = False,
    ) -> CommonMethods[G, Collection[Any, V]]:
        """Bucket the elements by a field, or by the result of `func(value, key)`.

        Groups appear in first-seen order, elements keep their source order inside a group.

        Group keys are compared by exact equality: normalize them in the callable if needed (e.g. `str.lower`).

        Args:
            key_or_fn (Callable[[V, K], G] | str | int): Field name, dotted path, or `(value, key)` callable.
            preserve_keys (bool): Keep the source keys inside each group. Defaults to False, numbering them from zero.

        Returns:
            CommonMethods[G, Collection[Any, V]]: An associative collection of `Collection` groups.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> staff = pcl.collect([
        ...     {"name": "Rama", "dept": "IT"},
        ...     {"name": "Perdana", "dept": "IT"},
        ...     {"name": "John", "dept": "HR"},
        ... ])
        >>> staff.group_by("dept").map(lambda group, _: group.pluck("name").all()).all()
        {'IT': ['Rama', 'Perdana'], 'HR': ['John']}
        >>> staff.group_by(lambda person, _: person["dept"].lower()).keys().all()
        ['it', 'hr']

        ```
        """
        from ._eager import Collection

        getter = keyed_getter(key_or_fn)
        sequential = not preserve_keys

        def _group_by(pairs: Pairs[K, V]) -> Iterator[tuple[G, Collection[Any, V]]]:
            groups: dict[G, list[tuple[K, V]]] = cz.itertoolz.groupby(
                lambda pair: getter(pair[1], pair[0]), pairs
            )
            return (
                (group, Collection.from_entries(entries(members, sequential=sequential), sequential=sequential))
                for group, members in groups.items()
            )

        return self._new_keys(_group_by)

    def map_to_groups[G, R](
        self, func: Callable[[V, K], Mapping[G, R]]
    ) -> CommonMethods[G, Collection[int, R]]:
        """Group the items produced by `func(value, key)`, which returns a `{group: item}` mapping.

        Args:
            func (Callable[[V, K], Mapping[G, R]]): Returns a single-entry mapping for each element.

        Returns:
            CommonMethods[G, Collection[int, R]]: An associative collection of sequential `Collection` groups, in first-seen order.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> staff = pcl.collect([
        ...     {"name": "Rama", "dept": "IT"},
        ...     {"name": "Perdana", "dept": "IT"},
        ...     {"name": "John", "dept": "HR"},
        ... ])
        >>> staff.map_to_groups(lambda person, _: {person["dept"]: person["name"]})
        Collection({'IT': Collection(['Rama', 'Perdana']), 'HR': Collection(['John'])})

        ```
        """
        from ._eager import Collection

        def _map_to_groups(pairs: Pairs[K, V]) -> Iterator[tuple[G, Collection[int, R]]]:
            produced = itertools.chain.from_iterable(func(v, k).items() for k, v in pairs)
            groups: dict[G, list[tuple[G, R]]] = cz.itertoolz.groupby(0, produced)
            return (
                (group, Collection(item for _, item in members))
                for group, members in groups.items()
            )

        return self._new_keys(_map_to_groups)

    def key_by[G](self, key_or_fn: Callable[[V, K], G] | str | int) -> CommonMethods[G, V]:
        """Re-key the elements by a field or by `func(value, key)`; the last element wins on duplicates.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([{"id": 1, "name": "Rama"}, {"id": 2, "name": "John"}]).key_by("id").keys().all()
        [1, 2]

        ```
        """
        getter = keyed_getter(key_or_fn)

        def _key_by(pairs: Pairs[K, V]) -> Iterator[tuple[G, V]]:
            return ((getter(v, k), v) for k, v in pairs)

        return self._new_keys(_key_by)

    def count_by[G](
        self, key_or_fn: Callable[[V, K], G] | str | int | None = None
    ) -> CommonMethods[G, int]:
        """Count the elements per value, or per field / `func(value, key)` result.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(["cat", "cat", "ox", "pig"]).count_by()
        Collection({'cat': 2, 'ox': 1, 'pig': 1})
        >>> pcl.collect(["cat", "mouse", "dog"]).count_by(lambda word, _: len(word))
        Collection({3: 2, 5: 1})

        ```
        """
        getter = keyed_getter(key_or_fn)

        def _count_by(pairs: Pairs[K, V]) -> Iterator[tuple[G, int]]:
            counts: dict[G, int] = cz.recipes.countby(lambda pair: getter(pair[1], pair[0]), pairs)
            return iter(counts.items())

        return self._new_keys(_count_by)
