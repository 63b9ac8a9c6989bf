"""Tests for the Option returned by searches."""

import pytest

import pycollect as pcl


def test_some_and_none() -> None:
    """Test the basic accessors of Some and NONE."""
    assert pcl.Some(1).is_some()
    assert pcl.NONE.is_none()
    assert pcl.Some(1).unwrap() == 1
    assert pcl.NONE.unwrap_or(2) == 2
    assert pcl.NONE.unwrap_or_else(lambda: 3) == 3


def test_unwrap_none_raises_not_found() -> None:
    """Test that unwrapping NONE raises a LookupError subclass."""
    with pytest.raises(pcl.NotFoundError):
        pcl.NONE.unwrap()
    with pytest.raises(LookupError, match="no user"):
        pcl.NONE.expect("no user")


def test_combinators() -> None:
    """Test map, and_then, or_else and filter."""
    assert pcl.Some(2).map(lambda x: x * 2) == pcl.Some(4)
    assert pcl.NONE.map(lambda x: x * 2) is pcl.NONE
    assert pcl.Some(2).and_then(lambda x: pcl.NONE) is pcl.NONE
    assert pcl.NONE.or_else(lambda: pcl.Some(1)) == pcl.Some(1)
    assert pcl.Some(2).filter(lambda x: x > 2) is pcl.NONE


def test_from_() -> None:
    """Test building an Option from a possibly None value."""
    assert pcl.Option.from_(0) == pcl.Some(0)
    assert pcl.Option.from_(None) is pcl.NONE


def test_first_returns_option() -> None:
    """Test that searches compose with Option combinators."""
    names = pcl.collect(["Rama", "John"])
    assert names.first(lambda name, _: name.startswith("J")).map(str.upper).unwrap() == "JOHN"
    assert names.first(lambda name, _: name.startswith("Z")).unwrap_or("nobody") == "nobody"
