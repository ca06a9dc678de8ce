import math
import unittest

import pytest

from csv_parser import ParsedTable, parse
from view_engine import (
    collation_key,
    compare_values,
    derive,
    filter_positions,
    filtered_and_sorted,
    paginate,
    parse_numeric_prefix,
)
from view_state import ASC, DESC, SortState, ViewState


PEOPLE = """name,city,age
Ann,Paris,31
bob,Berlin,7
Cara,paris,45
Dan,Rome,
Eve,Berlin,19
"""


def _column(rows, col):
    return [row[col] for row in rows]


def _single_column(values, col="v"):
    return ParsedTable.from_records([{col: v} for v in values])


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12", 12.0),
        ("12abc", 12.0),
        ("  3.5e2x", 350.0),
        ("-4", -4.0),
        ("+.5", 0.5),
        ("7.", 7.0),
        ("1e", 1.0),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
        (5, 5.0),
    ],
)
def test_parse_numeric_prefix(value, expected):
    assert parse_numeric_prefix(value) == expected


@pytest.mark.parametrize("value", ["abc", "", ".", "-", "e5", None, "x12"])
def test_parse_numeric_prefix_not_a_number(value):
    assert math.isnan(parse_numeric_prefix(value))


def test_compare_values_numeric_when_both_parse():
    assert compare_values("10", "2") > 0
    assert compare_values("2", "10") < 0
    assert compare_values("2.0", "2") == 0


def test_compare_values_falls_back_to_strings():
    assert compare_values("apple", "banana") < 0
    assert compare_values("banana", "apple") > 0
    assert compare_values("same", "same") == 0


def test_string_comparison_is_not_code_point_order():
    # "B" < "a" by code point
    assert compare_values("a", "B") < 0
    assert compare_values("B", "a") > 0
    assert collation_key("a") < collation_key("A") < collation_key("b")


class FilterTests(unittest.TestCase):
    def setUp(self):
        self.table = parse(PEOPLE)

    def _names(self, filters):
        state = ViewState()
        for col, value in filters.items():
            state = state.set_filter(col, value)
        return _column(filtered_and_sorted(self.table, state), "name")

    def test_no_filters_keeps_input_order(self):
        rows = filtered_and_sorted(self.table, ViewState())
        self.assertEqual(rows, list(self.table.rows))

    def test_filter_is_case_insensitive_substring(self):
        self.assertEqual(self._names({"city": "PAR"}), ["Ann", "Cara"])

    def test_empty_pattern_imposes_no_constraint(self):
        self.assertEqual(len(self._names({"city": ""})), 5)

    def test_every_filter_must_match(self):
        self.assertEqual(self._names({"city": "berlin", "name": "e"}), ["Eve"])

    def test_filter_on_unknown_column_matches_nothing(self):
        self.assertEqual(self._names({"country": "fr"}), [])

    def test_filter_on_unknown_column_with_empty_pattern_is_ignored(self):
        self.assertEqual(len(self._names({"country": ""})), 5)

    def test_pattern_is_not_a_regex(self):
        table = ParsedTable.from_records([{"v": "a.c"}, {"v": "abc"}])
        positions = filter_positions(table.frame, {"v": "a.c"})
        self.assertEqual(positions, [0])

    def test_non_string_pattern_is_coerced(self):
        table = ParsedTable.from_records([{"v": "x7"}, {"v": "y"}])
        self.assertEqual(filter_positions(table.frame, {"v": 7}), [0])
        self.assertEqual(filter_positions(table.frame, {"v": None}), [0, 1])

    def test_filtering_is_monotonic(self):
        loose = self._names({"city": "r"})
        tight = self._names({"city": "r", "age": "1"})
        self.assertLessEqual(len(tight), len(loose))
        self.assertTrue(set(tight) <= set(loose))

    def test_filtering_is_commutative(self):
        one = filter_positions(self.table.frame, {"city": "e", "name": "a"})
        two = filter_positions(self.table.frame, {"name": "a", "city": "e"})
        self.assertEqual(one, two)

    def test_filter_on_empty_table(self):
        self.assertEqual(filter_positions(ParsedTable.empty().frame, {"a": "x"}), [])


class SortTests(unittest.TestCase):
    def _sorted(self, values, direction=ASC):
        table = _single_column(values)
        state = ViewState(sort=SortState("v", direction))
        return _column(filtered_and_sorted(table, state), "v")

    def test_numeric_sort_is_not_lexicographic(self):
        self.assertEqual(self._sorted(["10", "2", "33"]), ["2", "10", "33"])

    def test_numeric_sort_descending(self):
        self.assertEqual(self._sorted(["10", "2", "33"], DESC), ["33", "10", "2"])

    def test_numeric_prefix_values_sort_numerically(self):
        self.assertEqual(
            self._sorted(["100kg", "9kg", "25kg"]), ["9kg", "25kg", "100kg"]
        )

    def test_mixed_values_compare_numbers_numerically(self):
        result = self._sorted(["10", "abc", "2"])
        self.assertEqual(sorted(result), ["10", "2", "abc"])
        self.assertLess(result.index("2"), result.index("10"))

    def test_string_sort(self):
        self.assertEqual(
            self._sorted(["cherry", "apple", "banana"]), ["apple", "banana", "cherry"]
        )

    def test_strings_collate_case_insensitively_lowercase_first(self):
        self.assertEqual(self._sorted(["b", "B", "a", "A"]), ["a", "A", "b", "B"])

    def test_accented_letters_sort_beside_their_base_letter(self):
        self.assertEqual(
            self._sorted(["zebra", "\u00e9clair", "apple", "Eagle"]),
            ["apple", "Eagle", "\u00e9clair", "zebra"],
        )

    def test_descending_is_reverse_of_ascending_without_ties(self):
        values = ["pear", "10", "fig", "3", "kiwi", "25"]
        asc = self._sorted(values, ASC)
        desc = self._sorted(values, DESC)
        self.assertEqual(desc, list(reversed(asc)))

    def test_sort_is_stable_for_ties(self):
        table = ParsedTable.from_records(
            [{"k": "1", "id": "a"}, {"k": "0", "id": "b"}, {"k": "1", "id": "c"}]
        )
        state = ViewState(sort=SortState("k", ASC))
        self.assertEqual(
            _column(filtered_and_sorted(table, state), "id"), ["b", "a", "c"]
        )

    def test_sort_runs_after_filter(self):
        table = parse(PEOPLE)
        state = ViewState().set_filter("city", "berlin").set_sort("age")
        self.assertEqual(_column(filtered_and_sorted(table, state), "name"), ["bob", "Eve"])

    def test_sort_does_not_touch_the_table(self):
        table = _single_column(["3", "1", "2"])
        filtered_and_sorted(table, ViewState(sort=SortState("v", ASC)))
        self.assertEqual(_column(table.rows, "v"), ["3", "1", "2"])


class PaginateTests(unittest.TestCase):
    def setUp(self):
        self.table = _single_column([str(i) for i in range(25)])

    def test_last_page_is_partial(self):
        view = derive(self.table, ViewState(page=3, page_size=10))
        self.assertEqual(view.total_pages, 3)
        self.assertEqual(len(view.rows), 5)
        self.assertEqual(_column(view.rows, "v"), [str(i) for i in range(20, 25)])

    def test_page_beyond_total_is_empty_not_an_error(self):
        view = derive(self.table, ViewState(page=9, page_size=10))
        self.assertEqual(view.rows, ())
        self.assertEqual(view.page, 9)

    def test_page_below_one_is_empty(self):
        self.assertEqual(paginate(list(range(25)), 0, 10), [])
        self.assertEqual(paginate(list(range(25)), -1, 10), [])

    def test_paginate_slice(self):
        self.assertEqual(paginate(list(range(12)), 2, 5), [5, 6, 7, 8, 9])


class DeriveTests(unittest.TestCase):
    def test_page_view_fields(self):
        table = parse(PEOPLE)
        state = ViewState().set_filter("city", "Berlin").set_sort("age").set_sort("age")
        view = derive(table, state)
        self.assertEqual(view.schema, ("name", "city", "age"))
        self.assertEqual(_column(view.rows, "name"), ["Eve", "bob"])
        self.assertEqual(view.total_rows, 2)
        self.assertEqual(view.total_pages, 1)
        self.assertEqual(view.sort_indicators, {"name": None, "city": None, "age": DESC})
        self.assertEqual(view.filter_values, {"name": "", "city": "Berlin", "age": ""})
        self.assertEqual(view.page_size_options, (5, 10, 20, 50, 100))
        self.assertFalse(view.has_prev)
        self.assertFalse(view.has_next)

    def test_empty_table(self):
        view = derive(None, ViewState())
        self.assertTrue(view.is_empty)
        self.assertEqual(view.total_pages, 0)
        self.assertEqual(view.rows, ())

    def test_derive_is_deterministic(self):
        table = parse(PEOPLE)
        state = ViewState().set_sort("age")
        self.assertEqual(derive(table, state), derive(table, state))


if __name__ == "__main__":
    unittest.main()
