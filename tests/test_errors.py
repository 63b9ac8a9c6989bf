"""Tests for the error hierarchy."""

import pytest

import pycollect as pcl


@pytest.mark.parametrize(
    ("error", "builtin"),
    [
        (pcl.EmptyCollectionError, ValueError),
        (pcl.LengthMismatchError, ValueError),
        (pcl.NotFoundError, LookupError),
    ],
)
def test_error_bases(error: type[Exception], builtin: type[Exception]) -> None:
    """Test that every error is both a CollectionError and a builtin error."""
    assert issubclass(error, pcl.CollectionError)
    assert issubclass(error, builtin)


def test_catch_all() -> None:
    """Test that library errors can be caught through the base class."""
    with pytest.raises(pcl.CollectionError):
        pcl.collect().avg()
    with pytest.raises(ValueError):
        pcl.collect().max()


def test_callable_errors_are_not_wrapped() -> None:
    """Test that a callable raising a library-like error keeps its own type."""

    def fails(value: int, _: int) -> bool:
        raise ZeroDivisionError(value)

    with pytest.raises(ZeroDivisionError):
        pcl.collect([1]).filter(fails)
    with pytest.raises(ZeroDivisionError):
        pcl.lazy([1]).filter(fails).all()
