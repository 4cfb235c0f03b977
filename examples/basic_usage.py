#!/usr/bin/env python3
"""
Basic usage examples for lazystream.
"""

import logging
import operator

from lazystream import (
    MISSING,
    Stream,
    StreamConfig,
    empty,
    from_iterable,
    int_range,
)


def example_pipelines():
    """Example: Lazy pipelines over ranges and collections."""
    print("\n=== Pipeline Example ===")

    numbers = int_range(1, lambda x: x <= 10)
    evens = numbers.filter(lambda x: x % 2 == 0)
    print(f"Evens: {evens.to_list()}")
    print(f"Squares with position: {numbers.map(lambda x, i: (i, x * x)).take(3).to_list()}")
    print(f"Sum: {numbers.reduce(operator.add)}")

    # The same handle can be traversed again
    print(f"Evens again: {evens.to_list()}")


def example_unbounded():
    """Example: Working with unbounded streams."""
    print("\n=== Unbounded Example ===")

    naturals = int_range(0, lambda x: True)
    print(f"First primes: {naturals.filter(is_prime).take(8).to_list()}")
    print(f"Cycled: {int_range(1, lambda x: x <= 3).cycle().take(8).to_list()}")


def is_prime(n):
    return n > 1 and all(n % d for d in range(2, int(n ** 0.5) + 1))


def example_grouping():
    """Example: Sorting, grouping and deduplication."""
    print("\n=== Grouping Example ===")

    words = from_iterable("the cat and the hat and the bat".split())
    counts = words.sorted().group().map(lambda g: (g.head(), g.size()))
    print(f"Word counts: {counts.to_dict(lambda pair: pair[0], lambda pair: pair[1])}")
    print(f"First seen: {words.distinct().to_list()}")

    short, long = words.partition(lambda w: len(w) <= 3 and w != 'the')
    print(f"Partitioned: {short.to_list()} / {long.to_list()}")


def example_prefixes():
    """Example: inits, tails and intersperse."""
    print("\n=== Prefix Example ===")

    letters = from_iterable('abc')
    print(f"Inits: {letters.inits().map(lambda s: ''.join(s)).to_list()}")
    print(f"Tails: {letters.tails().map(lambda s: ''.join(s)).to_list()}")
    print(f"Interspersed: {''.join(letters.intersperse('-'))}")
    print(f"Reduce on empty: {empty().reduce(operator.add) is MISSING}")


def example_large_sort():
    """Example: Sorting many records by key."""
    print("\n=== Large Sort Example ===")

    StreamConfig.set_defaults(pressure_check_interval=1_000)
    data = Stream(lambda: ({"id": i, "score": (i * 7919) % 5_000} for i in range(5_000)))
    ordered = data.sorted(key=lambda r: r["score"], reverse=True)
    print(f"Sorted {ordered.size():,} records, top={ordered.head()}, bottom={ordered.last()}")


def main():
    logging.basicConfig(level=logging.DEBUG)
    example_pipelines()
    example_unbounded()
    example_grouping()
    example_prefixes()
    example_large_sort()


if __name__ == "__main__":
    main()
