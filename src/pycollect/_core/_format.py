from collections.abc import Mapping, Sequence
from pprint import pformat
from typing import Any


def dict_repr(
    v: Mapping[Any, Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    truncated = dict(list(v.items())[:max_items])
    suffix = "..." if len(v) > max_items else ""
    return (
        pformat(truncated, depth=depth, width=width, compact=compact, sort_dicts=False)
        + suffix
    )


def list_repr(
    v: Sequence[Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    truncated = list(v[:max_items])
    suffix = "..." if len(v) > max_items else ""
    return (
        pformat(truncated, depth=depth, width=width, compact=compact, sort_dicts=False)
        + suffix
    )
