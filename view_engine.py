import re
import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key, lru_cache
from typing import Mapping, Optional

import numpy as np
import pandas as pd

from csv_parser import ParsedTable
from pagination import PAGE_SIZE_OPTIONS, page_bounds, total_pages
from view_state import DESC, SortState, ViewState, coerce_filter_value


# longest leading decimal literal, the way a lenient float parser reads "12abc" as 12
_NUMERIC_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def _to_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_numeric_prefix(value) -> float:
    """Return the number at the start of value, or NaN when there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _NUMERIC_PREFIX.match(_to_text(value))
    if match is None:
        return np.nan
    return float(match.group(1))


def _sign(delta) -> int:
    return (delta > 0) - (delta < 0)


@lru_cache(maxsize=65536)
def collation_key(text: str) -> tuple:
    """Multi-level key ordering text like a dictionary rather than by code point.

    Base letters decide first, ignoring case and accents; then accents; then
    case, lowercase first; the raw text breaks any remaining tie. So
    "a" < "A" < "á" < "b" < "B" regardless of the process locale.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (
        base.casefold(),
        decomposed.casefold(),
        tuple(ch.isupper() for ch in base),
        text,
    )


def _compare_parsed(a_num, a_key, b_num, b_key) -> int:
    if not (np.isnan(a_num) or np.isnan(b_num)):
        return _sign(a_num - b_num) if a_num != b_num else 0
    return (a_key > b_key) - (a_key < b_key)


def compare_values(a, b) -> int:
    """Numbers when both sides parse as numbers, collation order otherwise.

    The choice is made per pair, so a column mixing numbers and words still
    orders its numbers numerically among themselves.
    """
    return _compare_parsed(
        parse_numeric_prefix(a),
        collation_key(_to_text(a)),
        parse_numeric_prefix(b),
        collation_key(_to_text(b)),
    )


# ---------- pipeline stages ----------


def filter_positions(frame: pd.DataFrame, filters: Mapping) -> list[int]:
    mask = pd.Series(True, index=frame.index, dtype=bool)
    for column, pattern in (filters or {}).items():
        needle = coerce_filter_value(pattern)
        if not needle:
            continue
        if not isinstance(column, str) or column not in frame.columns:
            return []
        haystack = frame[column].map(_to_text).astype(object).str.lower()
        mask &= haystack.str.contains(needle.lower(), regex=False).astype(bool)
    return [int(pos) for pos in frame.index[mask.to_numpy()]]


def sort_positions(rows, positions, sort: SortState) -> list[int]:
    positions = list(positions)
    if sort is None or sort.column is None:
        return positions

    keyed = []
    for pos in positions:
        value = rows[pos].get(sort.column)
        keyed.append(
            (pos, parse_numeric_prefix(value), collation_key(_to_text(value)))
        )

    sign = -1 if sort.direction == DESC else 1

    def _cmp(left, right):
        return sign * _compare_parsed(left[1], left[2], right[1], right[2])

    return [item[0] for item in sorted(keyed, key=cmp_to_key(_cmp))]


def paginate(items, page, page_size) -> list:
    start, end = page_bounds(page, page_size, len(items))
    return list(items[start:end])


def filtered_and_sorted(table: ParsedTable, state: ViewState) -> list[dict]:
    positions = filter_positions(table.frame, state.filters)
    positions = sort_positions(table.rows, positions, state.sort)
    return [table.rows[pos] for pos in positions]


# ---------- output ----------


@dataclass(frozen=True)
class PageView:
    schema: tuple[str, ...]
    rows: tuple[dict, ...]
    page: int
    page_size: int
    total_pages: int
    total_rows: int
    page_start: int
    page_end: int
    sort_indicators: Mapping[str, Optional[str]]
    filter_values: Mapping[str, str]
    page_size_options: tuple[int, ...] = PAGE_SIZE_OPTIONS

    @property
    def is_empty(self) -> bool:
        return not self.schema

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def derive(table: Optional[ParsedTable], state: ViewState) -> PageView:
    """Filter, then sort, then slice out the requested page."""
    table = table if table is not None else ParsedTable.empty()
    visible = filtered_and_sorted(table, state)
    count = len(visible)
    start, end = page_bounds(state.page, state.page_size, count)
    return PageView(
        schema=table.schema,
        rows=tuple(visible[start:end]),
        page=state.page,
        page_size=state.page_size,
        total_pages=total_pages(count, state.page_size),
        total_rows=count,
        page_start=start,
        page_end=end,
        sort_indicators={col: state.sort.indicator(col) for col in table.schema},
        filter_values={col: state.filter_value(col) for col in table.schema},
    )
