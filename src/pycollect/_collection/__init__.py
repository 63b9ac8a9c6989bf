from ._eager import Collection
from ._lazy import LazyCollection

__all__ = ["Collection", "LazyCollection"]
