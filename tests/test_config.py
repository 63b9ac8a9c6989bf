"""Tests for the display configuration."""

from collections.abc import Iterator

import pytest

import pycollect as pcl


@pytest.fixture(autouse=True)
def _restore_config() -> Iterator[None]:
    previous = pcl.get_config()
    yield
    pcl.set_config(max_items=previous.max_items, depth=previous.depth, width=previous.width)


def test_defaults() -> None:
    """Test the default configuration."""
    assert pcl.get_config() == pcl.Config(max_items=20, depth=3, width=80)


def test_set_config_changes_repr() -> None:
    """Test that max_items truncates the repr of both key modes."""
    pcl.set_config(max_items=2)
    assert repr(pcl.collect([1, 2, 3])) == "Collection([1, 2]...)"
    assert repr(pcl.collect({"a": 1, "b": 2, "c": 3})) == "Collection({'a': 1, 'b': 2}...)"


def test_set_config_is_immutable_replacement() -> None:
    """Test that set_config returns a new frozen Config."""
    before = pcl.get_config()
    after = pcl.set_config(width=40)
    assert before.width == 80
    assert after.width == 40
    with pytest.raises(AttributeError):
        after.width = 10  # type: ignore[misc]


def test_set_config_validation() -> None:
    """Test that invalid settings are rejected."""
    with pytest.raises(ValueError, match="max_items"):
        pcl.set_config(max_items=0)
    with pytest.raises(TypeError):
        pcl.set_config(colour="red")
