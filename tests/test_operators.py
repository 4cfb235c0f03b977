#!/usr/bin/env python3
"""
Tests for the stream combinators.
"""

import unittest
from types import SimpleNamespace

from lazystream import Stream, empty, from_iterable, int_range
from lazystream.streams.operators import adapt_callback, FilterOperator


def counting(items):
    """A stream plus a dict recording factory calls and pulls."""
    stats = {"calls": 0, "pulled": 0}

    def source():
        stats["calls"] += 1
        for item in items:
            stats["pulled"] += 1
            yield item

    return Stream(source), stats


class TestFilterMapFlatten(unittest.TestCase):
    """Test the indexed one-to-one and one-to-many stages."""

    def test_filter_index_is_upstream_position(self):
        stream = from_iterable(['a', 'b', 'c', 'd', 'e'])
        self.assertEqual(
            stream.filter(lambda value, index: index % 2 == 0).to_list(),
            ['a', 'c', 'e']
        )

    def test_filter_index_after_filter(self):
        positions = []

        def record(value, index):
            positions.append(index)
            return True

        from_iterable([1, 2, 3, 4]).filter(lambda x: x > 2).filter(record).to_list()
        self.assertEqual(positions, [0, 1])

    def test_map_with_index(self):
        stream = from_iterable(['x', 'y', 'z'])
        self.assertEqual(stream.map(lambda v, i: f"{i}:{v}").to_list(), ['0:x', '1:y', '2:z'])

    def test_map_with_builtin(self):
        self.assertEqual(from_iterable([1, 2]).map(str).to_list(), ['1', '2'])

    def test_flatten(self):
        nested = from_iterable([[1, 2], [], [3], (4, 5)])
        self.assertEqual(nested.flatten().to_list(), [1, 2, 3, 4, 5])

    def test_flatten_streams(self):
        nested = from_iterable([Stream.of(1, 2), empty(), Stream.of(3)])
        self.assertEqual(nested.flatten().to_list(), [1, 2, 3])

    def test_flat_map(self):
        stream = from_iterable([1, 2, 3])
        self.assertEqual(stream.flat_map(lambda x: [x] * x).to_list(), [1, 2, 2, 3, 3, 3])
        self.assertEqual(stream.flat_map(lambda x, i: [i]).to_list(), [0, 1, 2])

    def test_flat_map_of_unbounded_is_lazy(self):
        pairs = int_range(0, lambda x: True).flat_map(lambda x: [x, -x])
        self.assertEqual(pairs.take(5).to_list(), [0, 0, 1, -1, 2])


class TestSorting(unittest.TestCase):
    """Test the eager sort stage."""

    def test_natural_order(self):
        self.assertEqual(from_iterable([3, 1, 2]).sorted().to_list(), [1, 2, 3])

    def test_comparator(self):
        stream = from_iterable([3, 1, 2])
        self.assertEqual(stream.sorted(lambda a, b: b - a).to_list(), [3, 2, 1])

    def test_key_and_reverse(self):
        words = from_iterable(['ccc', 'a', 'bb'])
        self.assertEqual(words.sorted(key=len).to_list(), ['a', 'bb', 'ccc'])
        self.assertEqual(words.sorted(key=len, reverse=True).to_list(), ['ccc', 'bb', 'a'])

    def test_stable(self):
        pairs = from_iterable([(1, 'a'), (0, 'b'), (1, 'c'), (0, 'd')])
        result = pairs.sorted(lambda x, y: x[0] - y[0]).to_list()
        self.assertEqual(result, [(0, 'b'), (0, 'd'), (1, 'a'), (1, 'c')])

    def test_realizes_upstream_once(self):
        stream, stats = counting([2, 3, 1])
        ordered = stream.sorted()

        self.assertEqual(stats["calls"], 1)
        self.assertEqual(ordered.to_list(), [1, 2, 3])
        self.assertEqual(ordered.to_list(), [1, 2, 3])
        self.assertEqual(stats["calls"], 1)

    def test_empty(self):
        self.assertEqual(empty().sorted().to_list(), [])

    def test_large_sort_keeps_original_objects(self):
        boxes = [SimpleNamespace(v=i) for i in range(20_000, 0, -1)]
        result = from_iterable(boxes).sorted(key=lambda b: b.v).to_list()

        self.assertIs(result[0], boxes[-1])
        self.assertIs(result[-1], boxes[0])

    def test_large_sort_of_group_streams(self):
        groups = int_range(0, lambda x: x < 30_000).group(lambda a, b: a // 2 == b // 2)
        emitted = groups.to_list()
        ordered = from_iterable(emitted).sorted(key=lambda g: -g.head()).to_list()

        self.assertEqual(len(ordered), 15_000)
        self.assertIs(ordered[0], emitted[-1])
        self.assertIs(ordered[-1], emitted[0])
        self.assertEqual(ordered[0].to_list(), [29_998, 29_999])


class TestSlicing(unittest.TestCase):
    """Test take/drop and their predicate variants."""

    def setUp(self):
        self.numbers = int_range(1, lambda x: x <= 5)

    def test_take(self):
        self.assertEqual(self.numbers.take(3).to_list(), [1, 2, 3])
        self.assertEqual(self.numbers.take(5).to_list(), [1, 2, 3, 4, 5])
        self.assertEqual(self.numbers.take(10).to_list(), [1, 2, 3, 4, 5])

    def test_take_non_positive(self):
        self.assertEqual(self.numbers.take(0).to_list(), [])
        self.assertEqual(self.numbers.take(-2).to_list(), [])

    def test_take_does_not_look_ahead(self):
        stream, stats = counting([1, 2, 3, 4, 5])
        self.assertEqual(stream.take(2).to_list(), [1, 2])
        self.assertEqual(stats["pulled"], 2)

        stats["pulled"] = 0
        stream.take(0).to_list()
        self.assertEqual(stats["pulled"], 0)

    def test_take_while_and_until(self):
        self.assertEqual(self.numbers.take_while(lambda x: x < 3).to_list(), [1, 2])
        self.assertEqual(self.numbers.take_until(lambda x: x == 4).to_list(), [1, 2, 3])
        self.assertEqual(self.numbers.take_while(lambda x: x < 10).to_list(), [1, 2, 3, 4, 5])
        self.assertEqual(self.numbers.take_until(lambda x: x == 1).to_list(), [])

    def test_take_while_on_unbounded(self):
        squares = int_range(1, lambda x: True).map(lambda x: x * x)
        self.assertEqual(squares.take_while(lambda x: x < 30).to_list(), [1, 4, 9, 16, 25])

    def test_drop(self):
        self.assertEqual(self.numbers.drop(2).to_list(), [3, 4, 5])
        self.assertEqual(self.numbers.drop(0).to_list(), [1, 2, 3, 4, 5])
        self.assertEqual(self.numbers.drop(-1).to_list(), [1, 2, 3, 4, 5])
        self.assertEqual(self.numbers.drop(9).to_list(), [])

    def test_drop_while_and_until(self):
        self.assertEqual(self.numbers.drop_while(lambda x: x < 3).to_list(), [3, 4, 5])
        self.assertEqual(self.numbers.drop_until(lambda x: x == 4).to_list(), [4, 5])
        self.assertEqual(self.numbers.drop_while(lambda x: x < 10).to_list(), [])
        self.assertEqual(self.numbers.drop_until(lambda x: x == 1).to_list(), [1, 2, 3, 4, 5])

    def test_drop_while_yields_later_matches(self):
        stream = from_iterable([1, 1, 5, 1, 1])
        self.assertEqual(stream.drop_while(lambda x: x == 1).to_list(), [5, 1, 1])

    def test_empty_upstream(self):
        for stream in (
            empty().take(3),
            empty().take_while(lambda x: True),
            empty().take_until(lambda x: False),
            empty().drop(3),
            empty().drop_while(lambda x: True),
            empty().drop_until(lambda x: False),
        ):
            self.assertEqual(stream.to_list(), [])


class TestStructural(unittest.TestCase):
    """Test init/tail/concat/append."""

    def setUp(self):
        self.numbers = int_range(1, lambda x: x <= 3)

    def test_init(self):
        self.assertEqual(self.numbers.init().to_list(), [1, 2])
        self.assertEqual(Stream.of(1).init().to_list(), [])
        self.assertEqual(empty().init().to_list(), [])

    def test_tail(self):
        self.assertEqual(self.numbers.tail().to_list(), [2, 3])
        self.assertEqual(empty().tail().to_list(), [])

    def test_concat(self):
        self.assertEqual(self.numbers.concat(Stream.of(7, 8)).to_list(), [1, 2, 3, 7, 8])
        self.assertEqual(empty().concat(self.numbers).to_list(), [1, 2, 3])
        self.assertEqual(self.numbers.concat([4]).to_list(), [1, 2, 3, 4])

    def test_append(self):
        self.assertEqual(self.numbers.append(4).to_list(), [1, 2, 3, 4])
        self.assertEqual(empty().append('x').to_list(), ['x'])


class TestPartitionDistinct(unittest.TestCase):
    """Test partition and distinct."""

    def test_partition(self):
        accepted, declined = int_range(1, lambda x: x <= 6).partition(lambda x: x % 3 == 0)
        self.assertEqual(accepted.to_list(), [3, 6])
        self.assertEqual(declined.to_list(), [1, 2, 4, 5])

    def test_partition_halves_traverse_independently(self):
        stream, stats = counting([1, 2, 3])
        accepted, declined = stream.partition(lambda x: x > 1)

        self.assertEqual(stats["calls"], 0)
        declined.to_list()
        accepted.to_list()
        self.assertEqual(stats["calls"], 2)

    def test_distinct(self):
        stream = from_iterable([3, 1, 3, 2, 1, 4])
        self.assertEqual(stream.distinct().to_list(), [3, 1, 2, 4])

    def test_distinct_with_key(self):
        words = from_iterable(['apple', 'Avocado', 'banana', 'Blueberry', 'cherry'])
        self.assertEqual(
            words.distinct(lambda w: w[0].lower()).to_list(),
            ['apple', 'banana', 'cherry']
        )

    def test_distinct_is_per_traversal(self):
        unique = from_iterable([1, 1, 2]).distinct()
        self.assertEqual(unique.to_list(), [1, 2])
        self.assertEqual(unique.to_list(), [1, 2])

    def test_distinct_on_unbounded(self):
        mod = int_range(0, lambda x: True).map(lambda x: x % 3).distinct()
        self.assertEqual(mod.take(3).to_list(), [0, 1, 2])


class TestGroup(unittest.TestCase):
    """Test run-length grouping."""

    def test_non_adjacent_equal_elements_split(self):
        groups = from_iterable([1, 1, 2, 1]).group().map(lambda g: g.to_list())
        self.assertEqual(groups.to_list(), [[1, 1], [2], [1]])

    def test_custom_equality(self):
        words = from_iterable(['ant', 'ape', 'bee', 'bat', 'cow'])
        groups = words.group(lambda a, b: a[0] == b[0]).map(lambda g: g.to_list())
        self.assertEqual(groups.to_list(), [['ant', 'ape'], ['bee', 'bat'], ['cow']])

    def test_compares_with_previous_element(self):
        stream = from_iterable([1, 2, 3, 7, 8])
        groups = stream.group(lambda a, b: b - a == 1).map(lambda g: g.to_list())
        self.assertEqual(groups.to_list(), [[1, 2, 3], [7, 8]])

    def test_empty(self):
        self.assertTrue(empty().group().is_empty())

    def test_groups_are_independent(self):
        groups = from_iterable([1, 2, 2, 3]).group().to_list()

        # Consumed out of order and more than once
        self.assertEqual(groups[2].to_list(), [3])
        self.assertEqual(groups[0].to_list(), [1])
        self.assertEqual(groups[1].to_list(), [2, 2])
        self.assertEqual(groups[1].size(), 2)

    def test_outer_stream_is_lazy(self):
        runs = int_range(0, lambda x: True).map(lambda x: x // 3).group()
        self.assertEqual(runs.take(2).map(lambda g: g.to_list()).to_list(), [[0, 0, 0], [1, 1, 1]])


class TestInitsTails(unittest.TestCase):
    """Test prefix and suffix enumeration."""

    def setUp(self):
        self.numbers = int_range(1, lambda x: x <= 3)

    def test_inits(self):
        self.assertEqual(
            self.numbers.inits().map(lambda s: s.to_list()).to_list(),
            [[], [1], [1, 2], [1, 2, 3]]
        )

    def test_tails(self):
        self.assertEqual(
            self.numbers.tails().map(lambda s: s.to_list()).to_list(),
            [[1, 2, 3], [2, 3], [3], []]
        )

    def test_empty(self):
        self.assertEqual(empty().inits().map(lambda s: s.to_list()).to_list(), [[]])
        self.assertEqual(empty().tails().map(lambda s: s.to_list()).to_list(), [[]])

    def test_prefixes_are_retraversable(self):
        prefixes = self.numbers.inits().to_list()
        self.assertEqual(prefixes[1].to_list(), [1])
        self.assertEqual(prefixes[1].to_list(), [1])
        self.assertEqual(prefixes[3].size(), 3)

    def test_suffixes_are_retraversable(self):
        suffixes = self.numbers.tails().to_list()
        self.assertEqual(suffixes[1].to_list(), [2, 3])
        self.assertEqual(suffixes[1].to_list(), [2, 3])

    def test_inits_pulls_upstream_once(self):
        stream, stats = counting([1, 2, 3, 4])
        for prefix in stream.inits():
            prefix.to_list()
        self.assertEqual(stats["calls"], 1)
        self.assertEqual(stats["pulled"], 4)

    def test_inits_of_unbounded(self):
        prefixes = int_range(0, lambda x: True).inits().take(3)
        self.assertEqual(prefixes.map(lambda s: s.to_list()).to_list(), [[], [0], [0, 1]])

    def test_inits_of_long_stream(self):
        n = 1000
        total = int_range(0, lambda x: x < n).inits().map(lambda s: s.last(-1)).last()
        self.assertEqual(total, n - 1)


class TestRepetition(unittest.TestCase):
    """Test replicate, cycle, intersperse and reverse."""

    def setUp(self):
        self.numbers = int_range(1, lambda x: x <= 3)

    def test_replicate(self):
        self.assertEqual(self.numbers.replicate(2).to_list(), [1, 2, 3, 1, 2, 3])
        self.assertEqual(self.numbers.replicate(1).to_list(), [1, 2, 3])
        self.assertEqual(self.numbers.replicate(0).to_list(), [])
        self.assertEqual(self.numbers.replicate(-3).to_list(), [])

    def test_replicate_reinvokes_factory(self):
        stream, stats = counting(['a'])
        self.assertEqual(stream.replicate(3).to_list(), ['a', 'a', 'a'])
        self.assertEqual(stats["calls"], 3)

    def test_cycle(self):
        self.assertEqual(self.numbers.cycle().take(7).to_list(), [1, 2, 3, 1, 2, 3, 1])
        self.assertEqual(
            self.numbers.cycle().map(lambda x, i: i).take_while(lambda i: i < 4).to_list(),
            [0, 1, 2, 3]
        )

    def test_cycle_of_empty_terminates(self):
        self.assertEqual(empty().cycle().to_list(), [])

    def test_intersperse(self):
        self.assertEqual(self.numbers.intersperse(0).to_list(), [1, 0, 2, 0, 3])
        self.assertEqual(Stream.of('a').intersperse(',').to_list(), ['a'])
        self.assertEqual(empty().intersperse(',').to_list(), [])

    def test_intersperse_join(self):
        letters = from_iterable('abc').intersperse('-')
        self.assertEqual(''.join(letters), 'a-b-c')

    def test_reverse(self):
        self.assertEqual(self.numbers.reverse().to_list(), [3, 2, 1])
        self.assertEqual(empty().reverse().to_list(), [])

    def test_reverse_realizes_once(self):
        stream, stats = counting([1, 2, 3])
        reversed_stream = stream.reverse()
        reversed_stream.to_list()
        reversed_stream.to_list()
        self.assertEqual(stats["calls"], 1)


class TestAdaptCallback(unittest.TestCase):
    """Test callback arity adaptation."""

    def test_single_argument(self):
        self.assertEqual(adapt_callback(lambda x: x * 2, 2)(3, 99), 6)

    def test_full_arity(self):
        self.assertEqual(adapt_callback(lambda x, i: (x, i), 2)(3, 1), (3, 1))

    def test_var_positional(self):
        self.assertEqual(adapt_callback(lambda *args: args, 3)(1, 2, 3), (1, 2, 3))

    def test_builtin_without_signature(self):
        self.assertEqual(adapt_callback(str, 2)(5, 0), '5')

    def test_operator_is_a_source_factory(self):
        stage = FilterOperator([1, 2, 3, 4], lambda x: x % 2 == 0)
        self.assertEqual(list(stage()), [2, 4])
        self.assertEqual(list(stage()), [2, 4])


if __name__ == "__main__":
    unittest.main()
