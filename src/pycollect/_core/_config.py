from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ._format import dict_repr, list_repr

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Config:
    """Process-wide display settings of `pycollect` collections.

    Args:
        max_items (int): Number of elements shown by `repr` before truncating with `...`.
        depth (int): Nesting depth passed to `pprint.pformat`.
        width (int): Line width passed to `pprint.pformat`.
    """

    max_items: int = 20
    depth: int = 3
    width: int = 80

    def list_repr(self, data: Sequence[Any]) -> str:
        return list_repr(data, self.max_items, self.depth, self.width)

    def dict_repr(self, data: Mapping[Any, Any]) -> str:
        return dict_repr(data, self.max_items, self.depth, self.width)


_CONFIG = Config()


def get_config() -> Config:
    """Return the current `Config`.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> pcl.get_config().max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:
    """Replace fields of the current `Config` and return the new one.

    Args:
        **changes (Any): Field names and their new values.

    Returns:
        Config: The configuration now in use.

    Raises:
        TypeError: If a field name is unknown.
        ValueError: If `max_items`, `depth` or `width` is not positive.

    Example:
    ```python
    >>> import pycollect as pcl
    >>> previous = pcl.get_config()
    >>> pcl.set_config(max_items=2)
    Config(max_items=2, depth=3, width=80)
    >>> pcl.collect([1, 2, 3])
    Collection([1, 2]...)
    >>> pcl.set_config(max_items=previous.max_items).max_items
    20

    ```
    """
    global _CONFIG  # noqa: PLW0603
    new = dataclasses.replace(_CONFIG, **changes)
    for field in dataclasses.fields(new):
        if getattr(new, field.name) < 1:
            msg = f"{field.name} must be a positive integer, got {getattr(new, field.name)!r}"
            raise ValueError(msg)
    logger.debug("pycollect config changed: %s -> %s", _CONFIG, new)
    _CONFIG = new
    return new
