"""Tests for the deprecated camelCase aliases."""

import pytest

import pycollect as pcl


@pytest.mark.parametrize(
    ("alias", "args", "expected"),
    [
        ("isEmpty", (), False),
        ("isNotEmpty", (), True),
        ("sortDesc", (), pcl.collect([3, 2, 1])),
        ("takeWhile", (lambda value, _: value < 2,), pcl.collect([1])),
        ("firstOrFail", (), 1),
        ("countBy", (), pcl.collect({1: 1, 2: 1, 3: 1})),
    ],
)
def test_alias_forwards(alias: str, args: tuple[object, ...], expected: object) -> None:
    """Test that each alias warns and returns what its snake_case method returns."""
    collection = pcl.collect([1, 2, 3])
    with pytest.deprecated_call(match=alias):
        assert getattr(collection, alias)(*args) == expected


def test_alias_on_lazy() -> None:
    """Test that aliases are also available on lazy collections."""
    with pytest.deprecated_call():
        assert pcl.lazy([[1], [2]]).flatMap(lambda value, _: value).all() == [1, 2]


def test_alias_name() -> None:
    """Test that aliases keep their own name for introspection."""
    assert pcl.Collection.groupBy.__name__ == "groupBy"
