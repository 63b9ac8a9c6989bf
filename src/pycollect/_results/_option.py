from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs

from .._errors import NotFoundError


class Option[T](ABC):
    """The result of a search that may find nothing.

    `Some(value)` holds what was found, `NONE` signals absence.

    Searches such as `Collection.first()` return an `Option` instead of raising,
    so that a failed lookup composes with the rest of a chain.
    """

    __slots__ = ()

    @staticmethod
    def from_[V](value: V | None) -> Option[V]:
        """Wrap **value** into `Some`, or return `NONE` if it is `None`.

        Args:
            value (V | None): The value to wrap.

        Returns:
            Option[V]: `Some(value)` or `NONE`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Option.from_(2)
        Some(2)
        >>> pcl.Option.from_(None)
        NONE

        ```
        """
        return NONE if value is None else Some(value)

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """Return `True` if the option holds a value.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Some(2).is_some()
        True
        >>> pcl.NONE.is_some()
        False

        ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Return `True` if the option is `NONE`."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """Return the contained value.

        Returns:
            T: The contained value.

        Raises:
            NotFoundError: If the option is `NONE`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Some("car").unwrap()
        'car'
        >>> pcl.NONE.unwrap()
        Traceback (most recent call last):
            ...
        pycollect._errors.NotFoundError: called `unwrap` on a `NONE`

        ```
        """
        ...

    def expect(self, msg: str) -> T:
        """Return the contained value, or raise `NotFoundError` with **msg**.

        Args:
            msg (str): Message of the error raised on `NONE`.

        Returns:
            T: The contained value.

        Raises:
            NotFoundError: If the option is `NONE`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.NONE.expect("no admin user")
        Traceback (most recent call last):
            ...
        pycollect._errors.NotFoundError: no admin user (called `expect` on a `NONE`)

        ```
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `NONE`)"
        raise NotFoundError(msg)

    def unwrap_or(self, default: T) -> T:
        """Return the contained value or **default**.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Some("car").unwrap_or("bike")
        'car'
        >>> pcl.NONE.unwrap_or("bike")
        'bike'

        ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Return the contained value or compute one with **f**.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.NONE.unwrap_or_else(lambda: 2 * 10)
        20

        ```
        """
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Apply **f** to a contained value, leaving `NONE` untouched.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Some("Hello, World!").map(len)
        Some(13)
        >>> pcl.NONE.map(len)
        NONE

        ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Call **f** with the contained value and return its `Option`.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> def half(x: int) -> pcl.Option[int]:
        ...     return pcl.Some(x // 2) if x % 2 == 0 else pcl.NONE
        >>> pcl.Some(8).and_then(half).and_then(half)
        Some(2)
        >>> pcl.Some(6).and_then(half).and_then(half)
        NONE

        ```
        """
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Return the option if it holds a value, otherwise the result of **f**."""
        return self if self.is_some() else f()

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the contained value only if **predicate** holds for it.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.Some(4).filter(lambda x: x > 3)
        Some(4)
        >>> pcl.Some(2).filter(lambda x: x > 3)
        NONE

        ```
        """
        if self.is_some() and predicate(self.unwrap()):
            return self
        return NONE


@dataclass(slots=True)
class Some[T](Option[T]):
    value: T

    def __repr__(self) -> str:
        return f"Some({self.value!r})"

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        msg = "called `unwrap` on a `NONE`"
        raise NotFoundError(msg)


NONE: Option[Any] = NoneOption()
