from dataclasses import dataclass, field, replace
from numbers import Integral
from types import MappingProxyType
from typing import Mapping, Optional

from pagination import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS, clamp_page


ASC = "asc"
DESC = "desc"


def coerce_filter_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, Integral):
        return None
    return int(value)


def _frozen(mapping) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: str = ASC

    @property
    def active(self) -> bool:
        return self.column is not None

    def indicator(self, column) -> Optional[str]:
        if self.column is None or column != self.column:
            return None
        return self.direction


@dataclass(frozen=True)
class ViewState:
    """Filter, sort and pagination settings.

    Instances are never mutated; every transition returns a new ViewState.
    """

    filters: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    sort: SortState = SortState()
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def initial(cls, page_size=None) -> "ViewState":
        size = _as_int(page_size)
        if size not in PAGE_SIZE_OPTIONS:
            size = DEFAULT_PAGE_SIZE
        return cls(page_size=size)

    def filter_value(self, column) -> str:
        return self.filters.get(column, "")

    @property
    def active_filters(self) -> dict[str, str]:
        return {col: pat for col, pat in self.filters.items() if pat}

    # ---------- transitions ----------
    def set_filter(self, column, value) -> "ViewState":
        filters = dict(self.filters)
        filters[column] = coerce_filter_value(value)
        return replace(self, filters=_frozen(filters), page=1)

    def set_sort(self, column) -> "ViewState":
        if column is None:
            return self
        if self.sort.column == column:
            direction = DESC if self.sort.direction == ASC else ASC
            return replace(self, sort=SortState(column, direction))
        return replace(self, sort=SortState(column, ASC))

    def set_page_size(self, page_size) -> "ViewState":
        size = _as_int(page_size)
        if size not in PAGE_SIZE_OPTIONS:
            return self
        return replace(self, page_size=size, page=1)

    def set_page(self, page, total_pages=None) -> "ViewState":
        target = _as_int(page)
        if target is None:
            return self
        count = _as_int(total_pages)
        if count is not None:
            target = clamp_page(target, count)
        return replace(self, page=target)

    def next_page(self, total_pages) -> "ViewState":
        return self.set_page(self.page + 1, total_pages)

    def prev_page(self) -> "ViewState":
        return replace(self, page=max(1, self.page - 1))

    def clear_view(self) -> "ViewState":
        # page size survives a clear
        return replace(self, filters=_frozen({}), sort=SortState(), page=1)
