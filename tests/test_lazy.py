"""Tests for LazyCollection pipelines."""

import itertools
import logging
from collections.abc import Iterator

import pytest

import pycollect as pcl


class Producer:
    """Generator function recording how many times it was called and how far it was pulled."""

    def __init__(self, limit: int | None = None) -> None:
        self.calls = 0
        self.pulled = 0
        self.closed = 0
        self.limit = limit

    def __call__(self) -> Iterator[int]:
        self.calls += 1
        numbers = itertools.count() if self.limit is None else range(self.limit)
        try:
            for number in numbers:
                self.pulled += 1
                yield number
        finally:
            self.closed += 1


def test_lazy_collection() -> None:
    """Test taking from an infinite producer."""

    def counter() -> Iterator[int]:
        value = 0
        while True:
            yield value
            value += 1

    result = pcl.LazyCollection.make(counter).take(10)
    assert result.all() == [0, 1, 2, 3, 4, 5, 6, 7, 8, 9]


def test_no_work_before_terminal() -> None:
    """Test that building a chain never calls the producer."""
    producer = Producer()
    pipeline = (
        pcl.LazyCollection.make(producer)
        .map(lambda value, _: value * 2)
        .filter(lambda value, _: value % 3 == 0)
        .sort()
        .group_by(lambda value, _: value % 2)
    )
    assert isinstance(pipeline, pcl.LazyCollection)
    assert producer.calls == 0


def test_take_short_circuits() -> None:
    """Test that take pulls no more than needed."""
    producer = Producer()
    assert pcl.LazyCollection.make(producer).map(lambda value, _: value + 1).take(3).all() == [1, 2, 3]
    assert producer.pulled == 3


@pytest.mark.parametrize(
    "terminal",
    [
        lambda lazy: lazy.first(lambda value, _: value == 4),
        lambda lazy: lazy.contains(4),
        lambda lazy: lazy.some(lambda value, _: value == 4),
        lambda lazy: lazy.every(lambda value, _: value < 4),
        lambda lazy: lazy.take_while(lambda value, _: value < 4).all(),
        lambda lazy: lazy.take_until(4).all(),
        lambda lazy: lazy.slice(2, 3).all(),
    ],
)
def test_short_circuiting_terminals(terminal) -> None:
    """Test that short-circuiting operations stop pulling an infinite producer."""
    producer = Producer()
    terminal(pcl.LazyCollection.make(producer))
    assert producer.pulled == 5


def test_abandoned_stream_is_closed() -> None:
    """Test that stopping early releases the producer."""
    producer = Producer()
    assert pcl.LazyCollection.make(producer).first().unwrap() == 0
    assert producer.closed == 1


def test_reiteration_calls_producer_again() -> None:
    """Test that each terminal re-invokes the factory."""
    producer = Producer(limit=3)
    lazy = pcl.LazyCollection.make(producer).map(lambda value, _: value * 10)
    assert lazy.all() == [0, 10, 20]
    assert lazy.all() == [0, 10, 20]
    assert lazy.sum() == 30
    assert producer.calls == 3


def test_remember_calls_producer_once() -> None:
    """Test that remember runs the producer at most once across iterations."""
    producer = Producer(limit=4)
    cached = pcl.LazyCollection.make(producer).remember()
    assert cached.take(2).all() == [0, 1]
    assert cached.all() == [0, 1, 2, 3]
    assert cached.count() == 4
    assert producer.calls == 1
    assert producer.pulled == 4


def test_remember_keeps_producer_error() -> None:
    """Test that a remembered pipeline raises the producer error on every pull past it."""

    def failing() -> Iterator[int]:
        yield 1
        yield 2
        raise RuntimeError("producer broke")

    cached = pcl.LazyCollection.make(failing).remember()
    with pytest.raises(RuntimeError, match="producer broke"):
        cached.all()
    with pytest.raises(RuntimeError, match="producer broke"):
        cached.all()
    assert cached.take(2).all() == [1, 2]


def test_one_shot_iterator() -> None:
    """Test that a one-shot iterator source can only be drained once."""
    lazy = pcl.lazy(iter([1, 2]))
    assert lazy.all() == [1, 2]
    assert lazy.all() == []


def test_reiterable_sources() -> None:
    """Test lists, mappings and collections as lazy sources."""
    assert pcl.lazy([1, 2]).all() == [1, 2]
    assert pcl.lazy({"a": 1}).map(lambda value, key: f"{key}{value}").all() == {"a": "a1"}
    assert pcl.collect([3, 4]).lazy().all() == [3, 4]


def test_lazy_snapshot_of_collection() -> None:
    """Test that a lazy view does not see later mutations of its source collection."""
    source = pcl.collect([1])
    lazy = source.lazy()
    source.push(2)
    assert lazy.all() == [1]


def test_factories() -> None:
    """Test the lazy convenience producers."""
    assert pcl.LazyCollection.range(0, 4).all() == [0, 1, 2, 3]
    assert pcl.LazyCollection.from_count(5, 2).take(3).all() == [5, 7, 9]
    assert pcl.LazyCollection.times(3, lambda number: -number).all() == [-1, -2, -3]


def test_collect_keeps_mode() -> None:
    """Test that materializing keeps keys and key mode."""
    eager = pcl.lazy({"a": 1, "b": 2}).filter(lambda value, _: value > 1).collect()
    assert isinstance(eager, pcl.Collection)
    assert eager == pcl.collect({"b": 2})
    assert pcl.lazy(range(3)).eager() == pcl.collect([0, 1, 2])


def test_chunks_are_built_on_pull() -> None:
    """Test lazy chunking of an infinite producer."""
    producer = Producer()
    chunks = pcl.LazyCollection.make(producer).chunk(2).take(2).all()
    assert chunks == [pcl.collect([0, 1]), pcl.collect([2, 3])]
    assert producer.pulled <= 6


def test_whole_stream_operations_are_deferred() -> None:
    """Test that sort and group_by only run once pulled."""
    producer = Producer(limit=5)
    grouped = pcl.LazyCollection.make(producer).sort_desc().group_by(lambda value, _: value % 2)
    assert producer.calls == 0
    assert grouped.all() == {0: pcl.collect([4, 2, 0]), 1: pcl.collect([3, 1])}


def test_lazy_errors_propagate() -> None:
    """Test that a producer raising mid-pull surfaces at the terminal."""

    def failing() -> Iterator[int]:
        yield 1
        raise RuntimeError("producer broke")

    pipeline = pcl.LazyCollection.make(failing).map(lambda value, _: value)
    assert pipeline.first().unwrap() == 1
    with pytest.raises(RuntimeError, match="producer broke"):
        pipeline.all()


def test_lazy_combine_mismatch_raises_when_pulled() -> None:
    """Test that combine validates lengths when the pipeline is pulled."""
    combined = pcl.lazy(["a", "b"]).combine([1])
    with pytest.raises(pcl.LengthMismatchError):
        combined.all()


def test_each_drives_pipeline() -> None:
    """Test that each consumes a lazy pipeline with early stop."""
    producer = Producer()
    seen: list[int] = []
    pcl.LazyCollection.make(producer).each(lambda value, _: seen.append(value) or value < 2)
    assert seen == [0, 1, 2]


def test_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Test the debug records emitted around lazy evaluation."""
    with caplog.at_level(logging.DEBUG, logger="pycollect"):
        pcl.LazyCollection.range(0, 3).collect()
        cached = pcl.LazyCollection.range(0, 3).remember()
        cached.all()
        cached.all()
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("invoking lazy producer") for message in messages)
    assert any(message.startswith("materializing") for message in messages)
    assert "replaying 3 remembered entries" in messages
