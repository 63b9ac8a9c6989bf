from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Self

import more_itertools as mit

from .._core import get_config
from .._errors import EmptyCollectionError
from .._results import NONE, Option, Some
from ._aggregations import BaseAgg
from ._aliases import LegacyAliases
from ._common import entries, into_factory
from ._filters import BaseFilter
from ._joins import BaseJoins
from ._maps import BaseMap
from ._ordering import BaseOrdering
from ._partitions import BasePartitions

if TYPE_CHECKING:
    from .._types import Pairs, PairsFactory
    from ._lazy import LazyCollection


class Collection[K, V](
    BaseMap[K, V],
    BaseFilter[K, V],
    BasePartitions[K, V],
    BaseJoins[K, V],
    BaseAgg[K, V],
    BaseOrdering[K, V],
    LegacyAliases,
):
    """An eager, ordered collection of `(key, value)` entries, backed by a `dict`.

    A collection is either *sequential*, list-like with keys `0..n-1`, or *associative*, with arbitrary hashable keys.

    Building it from a `Mapping` gives an associative collection, from any other iterable a sequential one, and from another collection the same mode as its source.

    Transformations always return a new collection and never alter the receiver.

    On a sequential collection, operations dropping or reordering elements renumber the keys, so there are never gaps.

    Iterating over a collection yields its values, use `items()` for the entries.

    Args:
        source (Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]]): Where the entries come from. Defaults to an empty tuple.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> pcl.Collection([1, 2, 3])
    Collection([1, 2, 3])
    >>> pcl.Collection({"Rama": 100, "John": 80})
    Collection({'Rama': 100, 'John': 80})
    >>> pcl.Collection([3, 1, 2]).filter(lambda value, _: value > 1).all()
    [3, 2]

    ```
    """

    _inner: dict[K, V]

    __slots__ = ("_inner", "_sequential")

    def __init__(
        self,
        source: Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]] = (),
    ) -> None:
        factory, sequential = into_factory(source)
        self._inner = dict(factory())
        self._sequential = sequential

    @classmethod
    def from_entries(cls, pairs: Iterable[tuple[K, V]], *, sequential: bool = False) -> Self:
        """Build a collection straight from `(key, value)` entries, in the given key mode.

        Entries of a sequential collection must already be numbered `0..n-1`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Collection.from_entries([("a", 1), ("b", 2)])
        Collection({'a': 1, 'b': 2})

        ```
        """
        instance = cls.__new__(cls)
        instance._inner = dict(pairs)
        instance._sequential = sequential
        return instance

    @staticmethod
    def of[U](source: Iterable[U] = ()) -> Collection[Any, U]:
        """Alias of the constructor, reading better at the head of a chain.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Collection.of(["Rama", "John"]).map(lambda name, _: name.upper())
        Collection(['RAMA', 'JOHN'])

        ```
        """
        return Collection(source)

    @staticmethod
    def times[U](n: int, func: Callable[[int], U]) -> Collection[int, U]:
        """Build a sequential collection of `func(1), ..., func(n)`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Collection.times(3, lambda number: number * 10)
        Collection([10, 20, 30])

        ```
        """
        return Collection(func(number) for number in range(1, n + 1))

    @staticmethod
    def wrap(value: Any) -> Collection[Any, Any]:
        """Return **value** if it is already a `Collection`, a collection of its entries if it is iterable, and a one-element collection otherwise.

        Strings and bytes are wrapped as single values.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Collection.wrap("Rama")
        Collection(['Rama'])
        >>> pcl.Collection.wrap([1, 2])
        Collection([1, 2])
        >>> pcl.Collection.wrap(None)
        Collection([None])

        ```
        """
        match value:
            case Collection():
                return value
            case str() | bytes():
                return Collection((value,))
            case Mapping() | Iterable():
                return Collection(value)
            case _:
                return Collection((value,))

    # stream plumbing ------------------------------------------------------------
    def items(self) -> Pairs[K, V]:
        """Return an iterator over the `(key, value)` entries.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> list(pcl.collect({"a": 1}).items())
        [('a', 1)]

        ```
        """
        return iter(self._inner.items())

    def snapshot(self) -> PairsFactory[K, V]:
        frozen = tuple(self._inner.items())
        return lambda: iter(frozen)

    def _derive[KU, VU](
        self, factory: PairsFactory[KU, VU], *, sequential: bool
    ) -> Collection[KU, VU]:
        return self.from_entries(factory(), sequential=sequential)  # type: ignore[return-value]

    # dunders ------------------------------------------------------------
    def __iter__(self) -> Iterator[V]:
        return iter(self._inner.values())

    def __len__(self) -> int:
        return len(self._inner)

    def __contains__(self, value: object) -> bool:
        return value in self._inner.values()

    def __getitem__(self, key: K) -> V:
        return self._inner[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return self._sequential == other._sequential and self._inner == other._inner

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._sequential:
            return f"{self.__class__.__name__}({get_config().list_repr(list(self._inner.values()))})"
        return f"{self.__class__.__name__}({get_config().dict_repr(self._inner)})"

    # size ------------------------------------------------------------
    def is_empty(self) -> bool:
        return not self._inner

    def count(self) -> int:
        """Return the number of elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"a": 1, "b": 2}).count()
        2

        ```
        """
        return len(self._inner)

    def copy(self) -> Self:
        """Return a shallow copy, in the same key mode.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> original = pcl.collect([1, 2])
        >>> copied = original.copy().push(3)
        >>> original, copied
        (Collection([1, 2]), Collection([1, 2, 3]))

        ```
        """
        return self.from_entries(self._inner.items(), sequential=self._sequential)

    def lazy(self) -> LazyCollection[K, V]:
        """Switch to lazy evaluation, over a snapshot of the current entries.

        Later mutations of this collection are not seen by the returned `LazyCollection`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect([1, 2, 3])
        >>> doubled = data.lazy().map(lambda value, _: value * 2)
        >>> _ = data.push(4)
        >>> doubled.all()
        [2, 4, 6]

        ```
        """
        from ._lazy import LazyCollection

        return LazyCollection(self)

    # mutators ------------------------------------------------------------
    def _next_index(self) -> int:
        if self._sequential:
            return len(self._inner)
        positions = (
            key for key in self._inner if isinstance(key, int) and not isinstance(key, bool)
        )
        return max(positions, default=-1) + 1

    def _renumber(self) -> None:
        self._inner = dict(enumerate(self._inner.values()))

    def push(self, *values: V) -> Self:
        """Append **values** at the end, in place.

        Each value gets the next integer key: the length for a sequential collection, the largest integer key plus one for an associative one.

        Returns:
            Self: The collection itself, for chaining.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2]).push(3, 4)
        Collection([1, 2, 3, 4])
        >>> pcl.collect({"a": 1, 5: 2}).push(3)
        Collection({'a': 1, 5: 2, 6: 3})

        ```
        """
        for value in values:
            self._inner[self._next_index()] = value  # type: ignore[index]
        return self

    def pop(self) -> V:
        """Remove and return the last element.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect([1, 2, 3])
        >>> data.pop()
        3
        >>> data
        Collection([1, 2])

        ```
        """
        if not self._inner:
            msg = "pop from an empty collection"
            raise EmptyCollectionError(msg)
        _, value = self._inner.popitem()
        return value

    def shift(self) -> V:
        """Remove and return the first element, renumbering a sequential collection.

        Raises:
            EmptyCollectionError: If the collection is empty.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect(["a", "b", "c"])
        >>> data.shift()
        'a'
        >>> data.get(0)
        Some('b')

        ```
        """
        if not self._inner:
            msg = "shift from an empty collection"
            raise EmptyCollectionError(msg)
        value = self._inner.pop(next(iter(self._inner)))
        if self._sequential:
            self._renumber()
        return value

    def prepend(self, value: V, key: K | None = None) -> Self:
        """Insert **value** at the front, in place.

        Without **key**, a sequential collection is renumbered and an associative one uses its next integer key.

        Giving a **key** makes the collection associative.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([2, 3]).prepend(1)
        Collection([1, 2, 3])
        >>> pcl.collect({"b": 2}).prepend(1, "a")
        Collection({'a': 1, 'b': 2})

        ```
        """
        if key is None and self._sequential:
            self._inner = dict(enumerate((value, *self._inner.values())))
            return self
        new_key = self._next_index() if key is None else key
        rest = ((k, v) for k, v in self._inner.items() if k != new_key)
        self._inner = {new_key: value, **dict(rest)}  # type: ignore[dict-item]
        self._sequential = False
        return self

    def put(self, key: K, value: V) -> Self:
        """Set **value** under **key**, in place, overwriting an existing entry where it stands.

        A sequential collection stays sequential when **key** is an existing position or the next one, and becomes associative otherwise.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(["a", "b"]).put(1, "B")
        Collection(['a', 'B'])
        >>> pcl.collect(["a"]).put("name", "Rama")
        Collection({0: 'a', 'name': 'Rama'})

        ```
        """
        if self._sequential and not (
            isinstance(key, int) and not isinstance(key, bool) and 0 <= key <= len(self._inner)
        ):
            self._sequential = False
        self._inner[key] = value
        return self

    def get(self, key: K) -> Option[V]:
        """Return the value under **key**, as an `Option`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> scores = pcl.collect({"Rama": 100})
        >>> scores.get("Rama")
        Some(100)
        >>> scores.get("John").unwrap_or(0)
        0

        ```
        """
        if key in self._inner:
            return Some(self._inner[key])
        return NONE

    def has(self, *keys: K) -> bool:
        """Return `True` if every one of **keys** is present.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect({"a": 1, "b": 2}).has("a", "b")
        True
        >>> pcl.collect({"a": 1}).has("a", "c")
        False

        ```
        """
        return all(key in self._inner for key in keys)

    def forget(self, *keys: K) -> Self:
        """Remove the entries under **keys**, in place; absent keys are ignored.

        A sequential collection is renumbered afterwards.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(["a", "b", "c"]).forget(0)
        Collection(['b', 'c'])
        >>> pcl.collect({"a": 1, "b": 2}).forget("a", "z")
        Collection({'b': 2})

        ```
        """
        for key in keys:
            self._inner.pop(key, None)
        if self._sequential:
            self._renumber()
        return self

    def pull[D](self, key: K, default: D | None = None) -> V | D | None:
        """Remove the entry under **key**, in place, and return its value, or **default** if absent.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect({"name": "Rama", "dept": "IT"})
        >>> data.pull("name")
        'Rama'
        >>> data.pull("name", "unknown")
        'unknown'
        >>> data
        Collection({'dept': 'IT'})

        ```
        """
        if key not in self._inner:
            return default
        value = self._inner.pop(key)
        if self._sequential:
            self._renumber()
        return value

    # eager overrides ------------------------------------------------------------
    def partition(self, predicate: Callable[[V, K], bool]) -> tuple[Self, Self]:
        others, matching = mit.partition(
            lambda pair: predicate(pair[1], pair[0]), self._inner.items()
        )
        kept = list(matching)
        dropped = list(others)
        return (
            self.from_entries(entries(kept, sequential=self._sequential), sequential=self._sequential),
            self.from_entries(entries(dropped, sequential=self._sequential), sequential=self._sequential),
        )
