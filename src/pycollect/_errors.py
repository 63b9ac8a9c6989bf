from __future__ import annotations


class CollectionError(Exception):
    """Base class for every error raised by `pycollect` itself.

    Errors raised by user supplied callables are never wrapped into it.
    """


class EmptyCollectionError(CollectionError, ValueError):
    """An operation needing at least one element was called on an empty collection."""


class LengthMismatchError(CollectionError, ValueError):
    """Two sequences that must be paired one-to-one have different lengths."""


class NotFoundError(CollectionError, LookupError):
    """A searched value is absent (e.g. `unwrap` called on `NONE`)."""
