"""
Stable sorting of materialized streams.
"""

import logging
from functools import cmp_to_key
from typing import Any, Callable, List, Optional, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


def build_sort_key(
    compare: Optional[Callable[[T, T], int]] = None,
    key: Optional[Callable[[T], Any]] = None
) -> Optional[Callable[[T], Any]]:
    """
    Combine a three-way comparator and a key function into one sort key.

    The comparator, when given, is applied to the extracted keys.
    """
    if compare is None:
        return key
    if key is None:
        return cmp_to_key(compare)

    wrapped = cmp_to_key(compare)
    return lambda item: wrapped(key(item))


def stable_sort(
    items: List[T],
    compare: Optional[Callable[[T, T], int]] = None,
    key: Optional[Callable[[T], Any]] = None,
    reverse: bool = False
) -> List[T]:
    """
    Sort a list in place and return it.

    Items comparing equal keep their relative order, including when
    ``reverse`` is set. The list holds the original objects, never copies.

    Args:
        items: List to sort
        compare: Three-way comparator returning a negative, zero or positive int
        key: Function to extract sort key
        reverse: Sort in descending order

    Returns:
        The same list, sorted
    """
    items.sort(key=build_sort_key(compare, key), reverse=reverse)
    logger.debug("Sorted %d items", len(items))
    return items
