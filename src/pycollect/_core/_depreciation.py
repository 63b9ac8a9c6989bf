import warnings
from collections.abc import Callable
from functools import wraps
from typing import Any


def deprecated[**P, R](msg: str):
    def decorator(func: Callable[P, R]):
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            warnings.warn(msg, DeprecationWarning, stacklevel=2)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def renamed(old: str, new: str) -> Callable[..., Any]:
    """Build a method named **old** forwarding to the method **new**, warning on each call."""

    @deprecated(f"`{old}` is deprecated, use `{new}` instead")
    def forward(self: Any, *args: Any, **kwargs: Any) -> Any:
        return getattr(self, new)(*args, **kwargs)

    forward.__name__ = old
    forward.__qualname__ = old
    return forward
