from __future__ import annotations

from collections.abc import Callable
from typing import Concatenate, Self


class Pipeable:
    """Mixin providing the two fluent escape hatches shared by every collection."""

    __slots__ = ()

    def pipe[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Pass `Self` to **func** and return its result.

        Conceptually, this allows to write `c.pipe(f)` instead of `f(c)`, hence keeping a fluent chaining style.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function receiving the collection.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            R: Whatever **func** returns.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).pipe(lambda c: c.sum() * 2)
        12

        ```
        """
        return func(self, *args, **kwargs)

    def tap[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass `Self` to **func** for side effects and return `Self` unchanged.

        Useful for debugging in the middle of a chain.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function receiving the collection.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            Self: The instance itself.

        Example:
        ```python
        >>> import pycollect as pcl
        >>> pcl.collect([1, 2, 3]).tap(print).last().unwrap()
        Collection([1, 2, 3])
        3

        ```
        """
        func(self, *args, **kwargs)
        return self
