from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from ._aggregations import BaseAgg
from ._aliases import LegacyAliases
from ._common import MISSING, into_factory
from ._filters import BaseFilter
from ._joins import BaseJoins
from ._maps import BaseMap
from ._ordering import BaseOrdering
from ._partitions import BasePartitions

if TYPE_CHECKING:
    from .._types import Pairs, PairsFactory
    from ._eager import Collection

logger = logging.getLogger(__name__)


def _announced[K, V](factory: PairsFactory[K, V]) -> PairsFactory[K, V]:
    def _invoke() -> Iterable[tuple[K, V]]:
        logger.debug("invoking lazy producer %r", factory)
        return factory()

    return _invoke


class LazyCollection[K, V](
    BaseMap[K, V],
    BaseFilter[K, V],
    BasePartitions[K, V],
    BaseJoins[K, V],
    BaseAgg[K, V],
    BaseOrdering[K, V],
    LegacyAliases,
):
    """A deferred pipeline of `(key, value)` entries, pulled from a producer only when needed.

    It holds a zero-argument factory returning a fresh stream of entries, plus a key mode (see `Collection`).

    Transformations return a new `LazyCollection` immediately and do no work.

    Terminal operations (`all`, `collect`, `first`, `sum`, `each`, iteration...) call the factory again and pull the stream,
    stopping as soon as they can: `take(n)`, `first` or `contains` never pull more than needed, which makes infinite producers usable.

    Operations needing the whole stream, such as `sort` or `group_by`, are deferred too, but materialize their upstream once pulled.

    Each terminal re-invokes the producer, use `remember()` to run it at most once.

    Args:
        source (Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]]): A generator function, a re-iterable, a `Mapping`, or a collection.
            A one-shot iterator is accepted, but can only be drained once.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> def numbers():
    ...     print("producing")
    ...     yield from range(1, 10)
    >>> pipeline = pcl.LazyCollection(numbers).filter(lambda value, _: value % 2 == 1)
    >>> pipeline.take(2).all()
    producing
    [1, 3]

    ```
    """

    _source: PairsFactory[K, V]

    __slots__ = ("_sequential", "_source")

    def __init__(
        self,
        source: Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]] = (),
    ) -> None:
        factory, sequential = into_factory(source)
        self._source = _announced(factory)
        self._sequential = sequential

    @staticmethod
    def make[U](source: Iterable[U] | Callable[[], Iterable[U]] = ()) -> LazyCollection[Any, U]:
        """Create a `LazyCollection` from a generator function, or any other accepted source.

        The factory is stored, and called again by every terminal operation.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> def letters():
        ...     yield "a"
        ...     yield "b"
        >>> lazy = pcl.LazyCollection.make(letters)
        >>> lazy.all(), lazy.all()
        (['a', 'b'], ['a', 'b'])

        ```
        """
        return LazyCollection(source)

    @staticmethod
    def from_count(start: int = 0, step: int = 1) -> LazyCollection[int, int]:
        """Create an infinite `LazyCollection` of evenly spaced numbers, starting at **start**.

        Only use it with operations that stop pulling by themselves, such as `take` or `first`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.LazyCollection.from_count(10, 5).take(3).all()
        [10, 15, 20]

        ```
        """
        return LazyCollection(lambda: itertools.count(start, step))

    @staticmethod
    def range(start: int, stop: int, step: int = 1) -> LazyCollection[int, int]:
        """Create a `LazyCollection` of the integers from **start** up to, but excluding, **stop**.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.LazyCollection.range(1, 5).all()
        [1, 2, 3, 4]
        >>> pcl.LazyCollection.range(10, 0, -3).all()
        [10, 7, 4, 1]

        ```
        """
        return LazyCollection(range(start, stop, step))

    @staticmethod
    def times[U](n: int, func: Callable[[int], U] | None = None) -> LazyCollection[int, Any]:
        """Create a `LazyCollection` of `func(1), ..., func(n)`, or of `1, ..., n` without **func**.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.LazyCollection.times(3).all()
        [1, 2, 3]
        >>> pcl.LazyCollection.times(3, lambda number: number ** 2).all()
        [1, 4, 9]

        ```
        """

        def _times() -> Iterator[Any]:
            for number in range(1, n + 1):
                yield number if func is None else func(number)

        return LazyCollection(_times)

    # stream plumbing ------------------------------------------------------------
    def items(self) -> Pairs[K, V]:
        """Call the producer and return a fresh iterator over the `(key, value)` entries.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> list(pcl.lazy({"a": 1}).items())
        [('a', 1)]

        ```
        """
        return iter(self._source())

    def snapshot(self) -> PairsFactory[K, V]:
        return self._source

    def _derive[KU, VU](
        self, factory: PairsFactory[KU, VU], *, sequential: bool
    ) -> LazyCollection[KU, VU]:
        derived: LazyCollection[KU, VU] = LazyCollection.__new__(LazyCollection)
        derived._source = factory
        derived._sequential = sequential
        return derived

    def __repr__(self) -> str:
        mode = "sequential" if self._sequential else "associative"
        return f"{self.__class__.__name__}(<{mode}>)"

    # materialization ------------------------------------------------------------
    def collect(self) -> Collection[K, V]:
        """Pull every entry into an eager `Collection`, keeping the key mode.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.LazyCollection.range(0, 3).map(lambda value, _: value * 2).collect()
        Collection([0, 2, 4])

        ```
        """
        from ._eager import Collection

        logger.debug("materializing %r", self)
        return Collection(self)

    def eager(self) -> Collection[K, V]:
        """Alias of `collect`."""
        return self.collect()

    def remember(self) -> LazyCollection[K, V]:
        """Cache the entries as they are pulled, so that the producer runs at most once.

        Later iterations replay the cache first, and only pull upstream past what was already seen.

        If the producer raises, the error is raised again by every later iteration reaching that point.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> def numbers():
        ...     print("producing")
        ...     yield from range(5)
        >>> cached = pcl.LazyCollection(numbers).remember()
        >>> cached.take(2).all()
        producing
        [0, 1]
        >>> cached.all()
        [0, 1, 2, 3, 4]

        ```
        """
        cache: list[tuple[K, V]] = []
        upstream: list[Pairs[K, V]] = []
        failure: list[Exception] = []

        def _remembered() -> Iterator[tuple[K, V]]:
            if cache:
                logger.debug("replaying %d remembered entries", len(cache))
            position = 0
            while True:
                if position < len(cache):
                    yield cache[position]
                else:
                    if failure:
                        raise failure[0]
                    if not upstream:
                        upstream.append(self.items())
                    try:
                        pair = next(upstream[0], MISSING)
                    except Exception as exc:
                        failure.append(exc)
                        raise
                    if pair is MISSING:
                        return
                    cache.append(pair)  # type: ignore[arg-type]
                    yield pair  # type: ignore[misc]
                position += 1

        return self._derive(_remembered, sequential=self._sequential)
