"""
Lazy, re-traversable streams.
"""

from types import SimpleNamespace
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, Optional, Set,
    Tuple, TypeVar, Union
)

from lazystream.streams.operators import (
    adapt_callback,
    ConcatOperator, DistinctOperator, DropOperator, DropUntilOperator,
    DropWhileOperator, FilterOperator, FlattenOperator, GroupOperator,
    InitOperator, InitsOperator, IntersperseOperator, MapOperator,
    ReplicateOperator, ReverseOperator, SortOperator, TailsOperator,
    TakeOperator, TakeUntilOperator, TakeWhileOperator,
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')


class _Missing:
    """Marker for an absent value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class Stream(Iterable[T]):
    """
    A lazy stream that can be traversed any number of times.

    A stream stores a source factory, a zero-argument callable returning a
    fresh iterator. Each traversal calls the factory again, so two
    traversals never share a cursor. Operations never modify a stream; they
    return a new stream or, for terminal operations, a concrete value.
    """

    def __init__(self, source: Union[Iterable[T], Callable[[], Iterator[T]]]):
        """
        Initialize stream.

        Args:
            source: Callable returning a fresh iterator, or a collection that
                can be iterated more than once
        """
        if callable(source):
            self._source = source
        elif hasattr(source, '__iter__'):
            if iter(source) is source:
                raise TypeError(
                    "Source is a one-shot iterator; pass a collection or a "
                    "callable returning a fresh iterator"
                )
            self._source = lambda: iter(source)
        else:
            raise TypeError("Source must be iterable or callable")

    def __iter__(self) -> Iterator[T]:
        """Create a fresh iterator over the stream."""
        return iter(self._source())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r})"

    # Transformation operators

    def filter(self, predicate: Callable[..., bool]) -> 'Stream[T]':
        """Keep elements for which predicate(value, index) holds."""
        return Stream(FilterOperator(self, predicate))

    def map(self, func: Callable[..., U]) -> 'Stream[U]':
        """Apply func(value, index) to each element."""
        return Stream(MapOperator(self, func))

    def flatten(self) -> 'Stream[Any]':
        """Yield the items of each element, which must be iterable."""
        return Stream(FlattenOperator(self))

    def flat_map(self, func: Callable[..., Iterable[U]]) -> 'Stream[U]':
        """Map each element to an iterable and flatten the results."""
        return self.map(func).flatten()

    def sorted(self,
               compare: Optional[Callable[[T, T], int]] = None,
               *,
               key: Optional[Callable[[T], Any]] = None,
               reverse: bool = False) -> 'Stream[T]':
        """
        Sort elements.

        This realizes the whole stream immediately; the returned stream
        replays the sorted result without touching this stream again.

        Args:
            compare: Three-way comparator, negative/zero/positive
            key: Function to extract sort key
            reverse: Sort in descending order
        """
        return Stream(SortOperator(self, compare=compare, key=key, reverse=reverse))

    def reverse(self) -> 'Stream[T]':
        """Elements in reverse order. Realizes the stream immediately."""
        return Stream(ReverseOperator(self))

    def take(self, n: int) -> 'Stream[T]':
        """Take first n elements."""
        return Stream(TakeOperator(self, n))

    def take_while(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Take elements while predicate is true."""
        return Stream(TakeWhileOperator(self, predicate))

    def take_until(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Take elements until predicate becomes true."""
        return Stream(TakeUntilOperator(self, predicate))

    def drop(self, n: int) -> 'Stream[T]':
        """Skip first n elements."""
        return Stream(DropOperator(self, n))

    def drop_while(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Skip elements while predicate is true."""
        return Stream(DropWhileOperator(self, predicate))

    def drop_until(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Skip elements until predicate becomes true."""
        return Stream(DropUntilOperator(self, predicate))

    def init(self) -> 'Stream[T]':
        """All elements except the last."""
        return Stream(InitOperator(self))

    def tail(self) -> 'Stream[T]':
        """All elements except the first."""
        return self.drop(1)

    def concat(self, other: Iterable[T]) -> 'Stream[T]':
        """This stream followed by other."""
        return Stream(ConcatOperator(self, other))

    def append(self, item: T) -> 'Stream[T]':
        """This stream followed by a single item."""
        return Stream(ConcatOperator(self, (item,)))

    def inits(self) -> 'Stream[Stream[T]]':
        """Every prefix, from empty to the whole stream."""
        return Stream(InitsOperator(self))

    def tails(self) -> 'Stream[Stream[T]]':
        """Every suffix, from the whole stream to empty."""
        return Stream(TailsOperator(self))

    def partition(self, predicate: Callable[[T], bool]) -> Tuple['Stream[T]', 'Stream[T]']:
        """Split into (accepted, declined); each half re-reads this stream."""
        accepted = self.filter(lambda item: predicate(item))
        declined = self.filter(lambda item: not predicate(item))
        return accepted, declined

    def distinct(self, key_func: Optional[Callable[[T], Any]] = None) -> 'Stream[T]':
        """Remove duplicate elements, keeping first occurrences."""
        return Stream(DistinctOperator(self, key_func))

    def group(self, equal_func: Optional[Callable[[T, T], bool]] = None) -> 'Stream[Stream[T]]':
        """Group runs of adjacent equal elements into sub-streams."""
        if equal_func is None:
            return Stream(GroupOperator(self))
        return Stream(GroupOperator(self, equal_func))

    def replicate(self, n: int) -> 'Stream[T]':
        """This stream repeated n times."""
        return Stream(ReplicateOperator(self, max(0, n)))

    def cycle(self) -> 'Stream[T]':
        """This stream repeated forever. Bound it with take or take_while."""
        return Stream(ReplicateOperator(self))

    def intersperse(self, separator: Any) -> 'Stream[Any]':
        """Insert separator between adjacent elements."""
        return Stream(IntersperseOperator(self, separator))

    # Terminal operators

    def to_list(self) -> List[T]:
        """Collect all elements into a list."""
        return list(self)

    def to_set(self) -> Set[T]:
        """Collect all elements into a set."""
        return set(self)

    def to_dict(self,
                key_func: Callable[[T], K],
                value_func: Optional[Callable[[T], U]] = None) -> Dict[K, U]:
        """Collect into a dict; later keys win."""
        if value_func is None:
            return {key_func(item): item for item in self}
        return {key_func(item): value_func(item) for item in self}

    def to_object(self,
                  key_func: Callable[[T], Any],
                  value_func: Optional[Callable[[T], Any]] = None) -> SimpleNamespace:
        """Collect into a namespace keyed by str(key); later keys win."""
        mapping = self.to_dict(key_func, value_func)
        return SimpleNamespace(**{str(key): value for key, value in mapping.items()})

    def reduce(self, func: Callable[..., U], initial: Any = MISSING) -> U:
        """
        Left fold with func(accumulator, value, index).

        Without ``initial`` the first element seeds the accumulator and is
        not passed to func. An empty stream without ``initial`` returns
        ``MISSING``.
        """
        func = adapt_callback(func, 3)
        cursor = enumerate(self)
        result = initial

        if result is MISSING:
            first = next(cursor, None)
            if first is None:
                return MISSING
            result = first[1]

        for index, item in cursor:
            result = func(result, item, index)
        return result

    def size(self) -> int:
        """Count elements."""
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        """True if the stream yields nothing. Pulls at most one element."""
        for _ in self:
            return False
        return True

    def head(self, default: Optional[T] = None) -> Optional[T]:
        """Get first element."""
        for item in self:
            return item
        return default

    def last(self, default: Optional[T] = None) -> Optional[T]:
        """Get last element."""
        result = default
        for item in self:
            result = item
        return result

    def at(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """Get element at index, pulling index + 1 elements."""
        if index < 0:
            return default
        for position, item in enumerate(self):
            if position == index:
                return item
        return default

    def for_each(self, func: Callable[[T], None]) -> None:
        """Apply function to each element."""
        for item in self:
            func(item)

    # Factory methods

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> 'Stream[T]':
        """Create stream over a collection, re-read on each traversal."""
        return cls(items)

    @classmethod
    def of(cls, *items: T) -> 'Stream[T]':
        """Create stream over the given arguments."""
        return cls(items)

    @classmethod
    def empty(cls) -> 'Stream[Any]':
        """Create stream with no elements."""
        return cls(())

    @classmethod
    def int_range(cls,
                  start: int,
                  has_next: Callable[[int], bool],
                  step: Callable[[int], int] = lambda x: x + 1) -> 'Stream[int]':
        """
        Create stream of integers from start while has_next(x) holds.

        has_next is checked before every element, including the first.
        """
        def generate() -> Iterator[int]:
            x = start
            while has_next(x):
                yield x
                x = step(x)
        return cls(generate)


from_iterable = Stream.from_iterable
empty = Stream.empty
int_range = Stream.int_range
