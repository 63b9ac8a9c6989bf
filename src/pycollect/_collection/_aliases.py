from __future__ import annotations

from .._core import renamed


class LegacyAliases:
    """camelCase spellings of the collection methods, kept for code written against the older naming.

    Each alias emits a `DeprecationWarning` and forwards to its snake_case method.

    Example:
    ```python
    >>> import warnings
    >>> import pycollect as pcl
    >>> with warnings.catch_warnings(record=True) as caught:
    ...     warnings.simplefilter("always")
    ...     pcl.collect([]).isEmpty()
    True
    >>> caught[0].message
    DeprecationWarning('`isEmpty` is deprecated, use `is_empty` instead')

    ```
    """

    __slots__ = ()

    isEmpty = renamed("isEmpty", "is_empty")  # noqa: N815
    isNotEmpty = renamed("isNotEmpty", "is_not_empty")  # noqa: N815
    mapInto = renamed("mapInto", "map_into")  # noqa: N815
    mapSpread = renamed("mapSpread", "map_spread")  # noqa: N815
    mapToGroups = renamed("mapToGroups", "map_to_groups")  # noqa: N815
    mapWithKeys = renamed("mapWithKeys", "map_with_keys")  # noqa: N815
    flatMap = renamed("flatMap", "flat_map")  # noqa: N815
    groupBy = renamed("groupBy", "group_by")  # noqa: N815
    keyBy = renamed("keyBy", "key_by")  # noqa: N815
    takeWhile = renamed("takeWhile", "take_while")  # noqa: N815
    takeUntil = renamed("takeUntil", "take_until")  # noqa: N815
    skipWhile = renamed("skipWhile", "skip_while")  # noqa: N815
    skipUntil = renamed("skipUntil", "skip_until")  # noqa: N815
    sortDesc = renamed("sortDesc", "sort_desc")  # noqa: N815
    sortBy = renamed("sortBy", "sort_by")  # noqa: N815
    sortKeys = renamed("sortKeys", "sort_keys")  # noqa: N815
    firstOrFail = renamed("firstOrFail", "first_or_fail")  # noqa: N815
    countBy = renamed("countBy", "count_by")  # noqa: N815
