from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Concatenate, Final, Self

import cytoolz as cz

from .._core import Pipeable
from .._errors import EmptyCollectionError, NotFoundError
from .._results import NONE, Option, Some

if TYPE_CHECKING:
    from .._types import Pairs, PairsFactory

MISSING: Final = object()
"""Sentinel for "no argument given" where `None` is a legitimate value."""


def reindex[K, V](pairs: Iterable[tuple[K, V]]) -> Iterator[tuple[int, V]]:
    """Drop the keys of **pairs** and number the values from zero."""
    return enumerate(v for _, v in pairs)


def entries[V](
    pairs: Iterable[tuple[Any, V]], *, sequential: bool
) -> Iterable[tuple[Any, V]]:
    return reindex(pairs) if sequential else pairs


def sub_values(data: object) -> Iterable[Any]:
    """Values of a nested element: collections and mappings give their values, other iterables themselves."""
    match data:
        case CommonMethods():
            return iter(data)
        case Mapping():
            return data.values()
        case _:
            return data  # type: ignore[return-value]


def nested_values(data: object) -> Iterable[Any]:
    """Values of an element being flattened: strings, bytes and scalars have none."""
    match data:
        case str() | bytes():
            return ()
        case CommonMethods() | Mapping() | Iterable():
            return sub_values(data)
        case _:
            return ()


def into_factory(source: object) -> tuple[PairsFactory[Any, Any], bool]:
    """Turn any accepted source into a `(factory, sequential)` couple.

    - a collection gives its own entries and key mode,
    - a `Mapping` gives its items, associative,
    - any other iterable gives its values numbered from zero, sequential,
    - a zero-argument callable (typically a generator function) is called on each pull, sequential.
    """
    match source:
        case CommonMethods():
            return source.snapshot(), source.is_sequential()
        case Mapping():
            return (lambda: iter(source.items())), False
        case Iterable():
            return (lambda: enumerate(source)), True
        case _ if callable(source):
            return (lambda: enumerate(source())), True
        case _:
            msg = f"cannot build a collection from {type(source).__name__!r}, expected an iterable, a mapping or a generator function"
            raise TypeError(msg)


def data_get(target: Any, path: str | int) -> Any:
    """Read a field of **target** following a dotted **path**.

    Each segment indexes mappings and collections by key, sequences by position, and any other object by attribute.

    Args:
        target (Any): The element to read from.
        path (str | int): A key, a position, or a dotted path such as `"address.city"`.

    Returns:
        Any: The value found at the end of the path.

    Raises:
        KeyError: If a mapping has no such key.
        IndexError: If a sequence is too short.
        AttributeError: If an object has no such attribute.

    Example:
    ```python
    >>> from pycollect._collection._common import data_get
    >>> data_get({"user": {"tags": ["a", "b"]}}, "user.tags.1")
    'b'

    ```
    """
    segments: Sequence[str | int] = path.split(".") if isinstance(path, str) else (path,)
    for segment in segments:
        target = _step(target, segment)
    return target


def _step(target: Any, segment: str | int) -> Any:
    match target:
        case Mapping():
            return target[segment]
        case CommonMethods():
            return dict(target.items())[segment]
        case str() | bytes():
            return getattr(target, str(segment))
        case Sequence():
            return target[int(segment)]
        case _:
            return getattr(target, str(segment))


def keyed_getter[K, V](key_or_fn: Callable[[V, K], Any] | str | int | None) -> Callable[[V, K], Any]:
    """Normalize a field name or a `(value, key)` callable into a `(value, key)` callable."""
    if key_or_fn is None:
        return lambda value, _: value
    if callable(key_or_fn):
        return key_or_fn
    return lambda value, _: data_get(value, key_or_fn)


def value_getter[V](key_or_fn: Callable[[V], Any] | str | int | None) -> Callable[[V], Any]:
    """Normalize a field name or a `(value)` callable into a `(value)` callable."""
    if key_or_fn is None:
        return lambda value: value
    if callable(key_or_fn):
        return key_or_fn
    return functools.partial(data_get, path=key_or_fn)


def as_predicate[K, V](value_or_fn: Callable[[V, K], bool] | object) -> Callable[[V, K], bool]:
    """A `(value, key)` predicate, or a plain value compared by equality."""
    if callable(value_or_fn):
        return value_or_fn  # type: ignore[return-value]
    return lambda value, _: value == value_or_fn


class CommonMethods[K, V](Pipeable, ABC):
    """Operations shared by `Collection` and `LazyCollection`.

    Subclasses provide a fresh stream of `(key, value)` entries with `items()`,
    and build new instances of themselves from a stream factory with `_derive()`.

    Every transformation is written once as a stage over a stream of entries.

    The eager `Collection` drains the stage immediately, while the `LazyCollection` stores it and only runs it when pulled.
    """

    __slots__ = ()

    _sequential: bool

    @abstractmethod
    def items(self) -> Pairs[K, V]:
        """Return a fresh iterator over the `(key, value)` entries."""
        ...

    @abstractmethod
    def snapshot(self) -> PairsFactory[K, V]:
        """Return a factory giving the current entries, unaffected by later mutations."""
        ...

    @abstractmethod
    def _derive[KU, VU](
        self, factory: PairsFactory[KU, VU], *, sequential: bool
    ) -> CommonMethods[KU, VU]: ...

    def __iter__(self) -> Iterator[V]:
        return (v for _, v in self.items())

    @contextmanager
    def _opened(self, factory: PairsFactory[K, V] | None = None) -> Iterator[Pairs[K, V]]:
        """Open a stream of entries, from **factory** when given, and close it on exit if it is closable.

        Streams that cannot be closed, such as an `enumerate` over a generator,
        leave their producer to be finalized once the stream is dropped.
        """
        pairs = self.items() if factory is None else iter(factory())
        try:
            yield pairs
        finally:
            close = getattr(pairs, "close", None)
            if close is not None:
                close()

    # stage builders ------------------------------------------------------------
    def _keep_keys[**P, VU](
        self,
        stage: Callable[Concatenate[Pairs[K, V], P], Iterable[tuple[K, VU]]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> CommonMethods[K, VU]:
        """Derive from a stage keeping source keys: renumbered if sequential, preserved otherwise."""
        sequential = self._sequential

        def _source() -> Iterable[tuple[K, VU]]:
            return entries(stage(self.items(), *args, **kwargs), sequential=sequential)

        return self._derive(_source, sequential=sequential)

    def _new_values[**P, VU](
        self,
        stage: Callable[Concatenate[Pairs[K, V], P], Iterable[VU]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> CommonMethods[int, VU]:
        """Derive a sequential instance from a stage yielding bare values."""

        def _source() -> Iterator[tuple[int, VU]]:
            return enumerate(stage(self.items(), *args, **kwargs))

        return self._derive(_source, sequential=True)

    def _new_keys[**P, KU, VU](
        self,
        stage: Callable[Concatenate[Pairs[K, V], P], Iterable[tuple[KU, VU]]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> CommonMethods[KU, VU]:
        """Derive an associative instance from a stage yielding new `(key, value)` entries."""

        def _source() -> Iterable[tuple[KU, VU]]:
            return stage(self.items(), *args, **kwargs)

        return self._derive(_source, sequential=False)

    # state ------------------------------------------------------------
    def is_sequential(self) -> bool:
        """Return `True` for a list-like collection, `False` for an associative one.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2]).is_sequential()
        True
        >>> pcl.collect({"a": 1}).is_sequential()
        False

        ```
        """
        return self._sequential

    # terminals ------------------------------------------------------------
    def all(self) -> list[V] | dict[K, V]:
        """Materialize the entries into a plain Python container.

        This is a terminal operation.

        Returns:
            list[V] | dict[K, V]: A `list` of the values for a sequential collection, a `dict` copy for an associative one.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).all()
        [1, 2, 3]
        >>> pcl.collect({"Rama": 100, "John": 80}).all()
        {'Rama': 100, 'John': 80}

        ```
        """
        if self._sequential:
            return list(self)
        return dict(self.items())

    def count(self) -> int:
        """Return the number of elements.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.LazyCollection.range(0, 5).count()
        5

        ```
        """
        return cz.itertoolz.count(self.items())

    def is_empty(self) -> bool:
        """Return `True` if there is no element.

        On a `LazyCollection`, at most one element is pulled.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([]).is_empty()
        True

        ```
        """
        with self._opened() as pairs:
            return next(pairs, MISSING) is MISSING

    def is_not_empty(self) -> bool:
        """Return `True` if there is at least one element."""
        return not self.is_empty()

    def first(self, predicate: Callable[[V, K], bool] | None = None) -> Option[V]:
        """Return the first element, or the first one matching **predicate**.

        Stops pulling as soon as a match is found.

        Args:
            predicate (Callable[[V, K], bool] | None): Called with `(value, key)`. Defaults to None, matching anything.

        Returns:
            Option[V]: `Some(value)`, or `NONE` when empty or nothing matches.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect([1, 2, 3, 4, 5, 6, 7, 8, 9])
        >>> data.first()
        Some(1)
        >>> data.first(lambda value, _: value > 5)
        Some(6)
        >>> data.first(lambda value, _: value > 9)
        NONE

        ```
        """
        with self._opened() as pairs:
            for k, v in pairs:
                if predicate is None or predicate(v, k):
                    return Some(v)
        return NONE

    def first_or_fail(self, predicate: Callable[[V, K], bool] | None = None) -> V:
        """Return the first element (matching **predicate**), raising if there is none.

        Args:
            predicate (Callable[[V, K], bool] | None): Called with `(value, key)`. Defaults to None.

        Returns:
            V: The first matching element.

        Raises:
            EmptyCollectionError: If there is no element and no predicate was given.
            NotFoundError: If no element matches **predicate**.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([]).first_or_fail()
        Traceback (most recent call last):
            ...
        pycollect._errors.EmptyCollectionError: first element of an empty collection

        ```
        """
        found = self.first(predicate)
        if found.is_some():
            return found.unwrap()
        if predicate is None:
            msg = "first element of an empty collection"
            raise EmptyCollectionError(msg)
        msg = "no element matches the predicate"
        raise NotFoundError(msg)

    def last(self, predicate: Callable[[V, K], bool] | None = None) -> Option[V]:
        """Return the last element, or the last one matching **predicate**.

        The whole stream is consumed.

        Args:
            predicate (Callable[[V, K], bool] | None): Called with `(value, key)`. Defaults to None, matching anything.

        Returns:
            Option[V]: `Some(value)`, or `NONE` when empty or nothing matches.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> data = pcl.collect([1, 2, 3, 4, 5, 6, 7, 8, 9])
        >>> data.last()
        Some(9)
        >>> data.last(lambda value, _: value < 5)
        Some(4)

        ```
        """
        found: Option[V] = NONE
        for k, v in self.items():
            if predicate is None or predicate(v, k):
                found = Some(v)
        return found

    def find_key(self, value_or_predicate: Callable[[V, K], bool] | object) -> Option[K]:
        """Return the key of the first element equal to a value, or satisfying a `(value, key)` predicate.

        Stops pulling as soon as a match is found.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> scores = pcl.collect({"Rama": 100, "John": 80, "Jane": 80})
        >>> scores.find_key(80)
        Some('John')
        >>> scores.find_key(lambda value, _: value > 100)
        NONE
        >>> pcl.collect(["a", "b"]).find_key("b")
        Some(1)

        ```
        """
        predicate = as_predicate(value_or_predicate)
        with self._opened() as pairs:
            for k, v in pairs:
                if predicate(v, k):
                    return Some(k)
        return NONE

    def contains(self, value_or_predicate: Callable[[V, K], bool] | object) -> bool:
        """Check whether an element equals a value, or whether one satisfies a predicate.

        Equality is structural (`==`), never identity.

        A callable argument is always treated as a `(value, key)` predicate.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> names = pcl.collect(["Rama", "Perdana", "Watkinson"])
        >>> names.contains("Rama")
        True
        >>> names.contains(lambda value, _: value.startswith("W"))
        True
        >>> names.contains("John")
        False

        ```
        """
        return self.some(as_predicate(value_or_predicate))

    def some(self, predicate: Callable[[V, K], bool]) -> bool:
        """Return `True` if at least one `(value, key)` satisfies **predicate**, stopping at the first one."""
        with self._opened() as pairs:
            return any(predicate(v, k) for k, v in pairs)

    def every(self, predicate: Callable[[V, K], bool]) -> bool:
        """Return `True` if every `(value, key)` satisfies **predicate**.

        An empty collection returns `True`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([2, 4, 6]).every(lambda value, _: value % 2 == 0)
        True

        ```
        """
        with self._opened() as pairs:
            return all(predicate(v, k) for k, v in pairs)

    def reduce[A](self, func: Callable[[A, V], A], initial: A = MISSING) -> A:  # type: ignore[assignment]
        """Fold the values from left to right.

        Args:
            func (Callable[[A, V], A]): Called with `(carry, value)`.
            initial (A): Starting carry. When omitted, the first value is used and folding starts from the second.

        Returns:
            A: The final carry.

        Raises:
            EmptyCollectionError: If the collection is empty and no **initial** was given.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect(range(1, 10)).reduce(lambda carry, value: carry + value)
        45
        >>> pcl.collect(["a", "b"]).reduce(lambda carry, value: carry + value, ">")
        '>ab'

        ```
        """
        values = iter(self)
        if initial is MISSING:
            initial = next(values, MISSING)
            if initial is MISSING:
                msg = "reduce of an empty collection with no initial value"
                raise EmptyCollectionError(msg)
        return functools.reduce(func, values, initial)

    def join(self, glue: str, last_glue: str | None = None) -> str:
        """Join the stringified values with **glue**, using **last_glue** before the final one.

        Args:
            glue (str): Separator placed between values.
            last_glue (str | None): Separator placed between the last two values. Defaults to **glue**.

        Returns:
            str: The joined string.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> names = pcl.collect(["Rama", "Perdana", "Perdana"])
        >>> names.join("-")
        'Rama-Perdana-Perdana'
        >>> names.join("-", "_")
        'Rama-Perdana_Perdana'

        ```
        """
        values = [str(v) for v in self]
        if last_glue is None or len(values) < 2:  # noqa: PLR2004
            return glue.join(values)
        return glue.join(values[:-1]) + last_glue + values[-1]

    def each(self, func: Callable[[V, K], object]) -> Self:
        """Call **func** with `(value, key)` for every element, stopping when it returns `False`.

        On a `LazyCollection` this drives the pipeline.

        On a `Collection` it walks a snapshot of the entries, so **func** may mutate the collection.

        Returns:
            Self: The instance itself.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> _ = pcl.collect([1, 2, 3, 4]).each(lambda value, _: print(value) if value < 3 else False)
        1
        2

        ```
        """
        with self._opened(self.snapshot()) as pairs:
            for k, v in pairs:
                if func(v, k) is False:
                    break
        return self
