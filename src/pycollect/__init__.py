import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ._collection import Collection, LazyCollection
from ._core import Config, get_config, set_config
from ._errors import (
    CollectionError,
    EmptyCollectionError,
    LengthMismatchError,
    NotFoundError,
)
from ._results import NONE, NoneOption, Option, Some

logging.getLogger(__name__).addHandler(logging.NullHandler())


def collect[K, V](
    source: Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]] = (),
) -> Collection[Any, V]:
    """Build an eager `Collection` from **source**.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> pcl.collect([1, 2, 3]).map(lambda value, _: value * 2).all()
    [2, 4, 6]

    ```
    """
    return Collection(source)


def lazy[K, V](
    source: Iterable[V] | Mapping[K, V] | Callable[[], Iterable[V]] = (),
) -> LazyCollection[Any, V]:
    """Build a `LazyCollection` from **source**.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> pcl.lazy(range(100)).filter(lambda value, _: value % 7 == 0).take(3).all()
    [0, 7, 14]

    ```
    """
    return LazyCollection(source)


__all__ = [
    "NONE",
    "Collection",
    "CollectionError",
    "Config",
    "EmptyCollectionError",
    "LazyCollection",
    "LengthMismatchError",
    "NoneOption",
    "NotFoundError",
    "Option",
    "Some",
    "collect",
    "get_config",
    "lazy",
    "set_config",
]
