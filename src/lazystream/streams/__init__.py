"""Lazy, re-traversable streams and the operators that compose them."""

from lazystream.streams.stream import (
    Stream,
    MISSING,
    empty,
    from_iterable,
    int_range,
)
from lazystream.streams.operators import (
    StreamOperator,
    FilterOperator,
    MapOperator,
    FlattenOperator,
    ConcatOperator,
    TakeOperator,
    TakeWhileOperator,
    TakeUntilOperator,
    DropOperator,
    DropWhileOperator,
    DropUntilOperator,
    InitOperator,
    DistinctOperator,
    GroupOperator,
    InitsOperator,
    TailsOperator,
    ReplicateOperator,
    IntersperseOperator,
    MaterializedOperator,
    SortOperator,
    ReverseOperator,
)

__all__ = [
    "Stream",
    "MISSING",
    "empty",
    "from_iterable",
    "int_range",
    "StreamOperator",
    "FilterOperator",
    "MapOperator",
    "FlattenOperator",
    "ConcatOperator",
    "TakeOperator",
    "TakeWhileOperator",
    "TakeUntilOperator",
    "DropOperator",
    "DropWhileOperator",
    "DropUntilOperator",
    "InitOperator",
    "DistinctOperator",
    "GroupOperator",
    "InitsOperator",
    "TailsOperator",
    "ReplicateOperator",
    "IntersperseOperator",
    "MaterializedOperator",
    "SortOperator",
    "ReverseOperator",
]
