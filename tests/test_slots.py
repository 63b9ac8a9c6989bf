"""Tests for slot usage in pycollect classes."""

import pycollect as pcl


def _check_slots(obj: object) -> bool:
    try:
        _x = obj.__dict__
        return False  # noqa: TRY300
    except AttributeError:
        return True


def test_slots() -> None:  # noqa: D103
    assert _check_slots(pcl.Collection(()))
    assert _check_slots(pcl.Collection({"a": 1}).filter(lambda value, _: value > 0))
    assert _check_slots(pcl.LazyCollection(()))
    assert _check_slots(pcl.LazyCollection(()).map(lambda value, _: value))
    assert _check_slots(pcl.Some(42))
    assert _check_slots(pcl.NoneOption())
    assert _check_slots(pcl.get_config())
