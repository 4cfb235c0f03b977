"""
Stream operators for transformation.

Every operator is a source factory: calling it returns a fresh iterator over
its output, built from fresh iterators over its upstream stream(s). Operators
hold only their upstreams and transforms; whatever bookkeeping a traversal
needs lives in the generator created by ``iterate``.
"""

import inspect
import logging
import operator
from abc import ABC, abstractmethod
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar

from lazystream.algorithms import stable_sort
from lazystream.config import config
from lazystream.memory import monitor

T = TypeVar('T')
U = TypeVar('U')

logger = logging.getLogger(__name__)

_END = object()


def adapt_callback(func: Callable[..., Any], max_args: int) -> Callable[..., Any]:
    """
    Let ``func`` ignore trailing arguments it does not declare.

    Indexed operations call back with ``(value, index)`` (or
    ``(acc, value, index)`` for reduce); plain one-argument functions such as
    ``str`` or ``lambda x: ...`` receive only the leading arguments.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without a signature take the value only
        return lambda *args: func(*args[:max_args - 1])

    count = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return func
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1

    if count >= max_args:
        return func
    return lambda *args: func(*args[:count])


def materialize(upstream: Iterable[T], label: str = "stream") -> List[T]:
    """Realize an upstream into a list, watching memory pressure as it grows."""
    items: List[T] = []
    interval = max(1, config.pressure_check_interval)

    for item in upstream:
        items.append(item)
        if len(items) % interval == 0:
            monitor.check_memory_pressure()

    logger.debug("Materialized %d items for %s", len(items), label)
    return items


class StreamOperator(ABC):
    """Base class for stream operators."""

    def __call__(self) -> Iterator[Any]:
        return self.iterate()

    @abstractmethod
    def iterate(self) -> Iterator[Any]:
        """Create a fresh iterator over this operator's output."""
        pass


class FilterOperator(StreamOperator):
    """Filter elements by predicate(value, index)."""

    def __init__(self, upstream: Iterable[T], predicate: Callable[..., bool]):
        self.upstream = upstream
        self.predicate = adapt_callback(predicate, 2)

    def iterate(self) -> Iterator[T]:
        for index, item in enumerate(self.upstream):
            if self.predicate(item, index):
                yield item


class MapOperator(StreamOperator):
    """Map each element through mapper(value, index)."""

    def __init__(self, upstream: Iterable[T], func: Callable[..., U]):
        self.upstream = upstream
        self.func = adapt_callback(func, 2)

    def iterate(self) -> Iterator[U]:
        for index, item in enumerate(self.upstream):
            yield self.func(item, index)


class FlattenOperator(StreamOperator):
    """Yield every item of each upstream collection in order."""

    def __init__(self, upstream: Iterable[Iterable[T]]):
        self.upstream = upstream

    def iterate(self) -> Iterator[T]:
        for inner in self.upstream:
            yield from inner


class ConcatOperator(StreamOperator):
    """Yield each upstream in turn."""

    def __init__(self, *upstreams: Iterable[T]):
        self.upstreams = upstreams

    def iterate(self) -> Iterator[T]:
        for upstream in self.upstreams:
            yield from upstream


class TakeOperator(StreamOperator):
    """Take first n elements."""

    def __init__(self, upstream: Iterable[T], n: int):
        self.upstream = upstream
        self.n = n

    def iterate(self) -> Iterator[T]:
        if self.n <= 0:
            return
        for count, item in enumerate(self.upstream, 1):
            yield item
            if count >= self.n:
                return


class TakeWhileOperator(StreamOperator):
    """Take elements while predicate is true."""

    def __init__(self, upstream: Iterable[T], predicate: Callable[[T], bool]):
        self.upstream = upstream
        self.predicate = predicate

    def iterate(self) -> Iterator[T]:
        for item in self.upstream:
            if not self.predicate(item):
                return
            yield item


class TakeUntilOperator(TakeWhileOperator):
    """Take elements until predicate becomes true."""

    def __init__(self, upstream: Iterable[T], predicate: Callable[[T], bool]):
        super().__init__(upstream, lambda item: not predicate(item))


class DropOperator(StreamOperator):
    """Skip first n elements."""

    def __init__(self, upstream: Iterable[T], n: int):
        self.upstream = upstream
        self.n = n

    def iterate(self) -> Iterator[T]:
        cursor = iter(self.upstream)
        for _ in range(max(0, self.n)):
            if next(cursor, _END) is _END:
                return
        yield from cursor


class DropWhileOperator(StreamOperator):
    """Drop elements while predicate is true."""

    def __init__(self, upstream: Iterable[T], predicate: Callable[[T], bool]):
        self.upstream = upstream
        self.predicate = predicate

    def iterate(self) -> Iterator[T]:
        cursor = iter(self.upstream)
        for item in cursor:
            if not self.predicate(item):
                yield item
                break
        yield from cursor


class DropUntilOperator(DropWhileOperator):
    """Drop elements until predicate becomes true."""

    def __init__(self, upstream: Iterable[T], predicate: Callable[[T], bool]):
        super().__init__(upstream, lambda item: not predicate(item))


class InitOperator(StreamOperator):
    """All elements except the last."""

    def __init__(self, upstream: Iterable[T]):
        self.upstream = upstream

    def iterate(self) -> Iterator[T]:
        cursor = iter(self.upstream)
        previous = next(cursor, _END)
        if previous is _END:
            return
        for item in cursor:
            yield previous
            previous = item


class DistinctOperator(StreamOperator):
    """Remove duplicate elements."""

    def __init__(self, upstream: Iterable[T], key_func: Optional[Callable[[T], Any]] = None):
        self.upstream = upstream
        self.key_func = key_func or (lambda x: x)

    def iterate(self) -> Iterator[T]:
        seen = set()

        for item in self.upstream:
            key = self.key_func(item)
            if key not in seen:
                seen.add(key)
                yield item


class GroupOperator(StreamOperator):
    """
    Split runs of adjacent equal elements into sub-streams.

    Each run is collected into its own list before it is emitted, so the
    emitted streams are independent of the outer traversal and of each other.
    """

    def __init__(self, upstream: Iterable[T], equal_func: Callable[[T, T], bool] = operator.eq):
        self.upstream = upstream
        self.equal_func = equal_func

    def iterate(self) -> Iterator[Any]:
        from lazystream.streams.stream import Stream

        run: List[T] = []
        for item in self.upstream:
            if run and not self.equal_func(run[-1], item):
                yield Stream.from_iterable(run)
                run = []
            run.append(item)

        if run:
            yield Stream.from_iterable(run)


class InitsOperator(StreamOperator):
    """
    Every prefix, shortest first.

    Prefixes are views over a buffer that only ever grows during one
    traversal, so each emission costs O(1) and the upstream is pulled once.
    """

    def __init__(self, upstream: Iterable[T]):
        self.upstream = upstream

    def iterate(self) -> Iterator[Any]:
        from lazystream.streams.stream import Stream

        def prefix(buffer: List[T], length: int) -> 'Stream[T]':
            return Stream(lambda: islice(buffer, length))

        buffer: List[T] = []
        yield prefix(buffer, 0)
        for item in self.upstream:
            buffer.append(item)
            yield prefix(buffer, len(buffer))


class TailsOperator(StreamOperator):
    """Every suffix, longest first; the k-th suffix drops k upstream items."""

    def __init__(self, upstream: 'Stream[T]'):
        self.upstream = upstream

    def iterate(self) -> Iterator[Any]:
        cursor = iter(self.upstream)
        position = 0
        while True:
            yield self.upstream.drop(position)
            if next(cursor, _END) is _END:
                return
            position += 1


class ReplicateOperator(StreamOperator):
    """Re-run the upstream ``times`` times, or forever when ``times`` is None."""

    def __init__(self, upstream: Iterable[T], times: Optional[int] = None):
        self.upstream = upstream
        self.times = times

    def iterate(self) -> Iterator[T]:
        passes = 0
        while self.times is None or passes < self.times:
            produced = False
            for item in self.upstream:
                produced = True
                yield item
            if not produced and self.times is None:
                # Cycling nothing would never yield
                return
            passes += 1


class IntersperseOperator(StreamOperator):
    """Insert a separator between adjacent elements."""

    def __init__(self, upstream: Iterable[T], separator: Any):
        self.upstream = upstream
        self.separator = separator

    def iterate(self) -> Iterator[Any]:
        cursor = iter(self.upstream)
        first = next(cursor, _END)
        if first is _END:
            return
        yield first
        for item in cursor:
            yield self.separator
            yield item


class MaterializedOperator(StreamOperator):
    """
    Base for eager stages.

    The upstream is realized exactly once, when the operator is built; every
    traversal afterwards replays the stored list.
    """

    def __init__(self, items: List[T]):
        self.items = items

    def iterate(self) -> Iterator[T]:
        return iter(self.items)


class SortOperator(MaterializedOperator):
    """Stable sort by comparator, key or natural order."""

    def __init__(self,
                 upstream: Iterable[T],
                 compare: Optional[Callable[[T, T], int]] = None,
                 key: Optional[Callable[[T], Any]] = None,
                 reverse: bool = False):
        items = materialize(upstream, "sort")
        super().__init__(stable_sort(items, compare=compare, key=key, reverse=reverse))


class ReverseOperator(MaterializedOperator):
    """Elements in reverse order."""

    def __init__(self, upstream: Iterable[T]):
        items = materialize(upstream, "reverse")
        items.reverse()
        super().__init__(items)
