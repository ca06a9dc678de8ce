import logging

from csv_parser import ParsedTable
from view_engine import PageView, derive
from view_state import ViewState


logger = logging.getLogger(__name__)


class AppState:
    def __init__(self, table=None, file_path=None, page_size=None):
        self.file_path = file_path
        self._table: ParsedTable = table if table is not None else ParsedTable.empty()
        self._view = ViewState.initial(page_size)

        self._cache_key = None
        self._cache_value: PageView | None = None

    @property
    def table(self) -> ParsedTable:
        return self._table

    @property
    def view(self) -> ViewState:
        return self._view

    def replace_table(self, table, file_path=None):
        """Swap in a freshly loaded table in one assignment.

        Filters, sort and rows per page carry over; only "clear view" resets
        them. The page is clamped to what the new table holds.
        """
        if table is None:
            table = ParsedTable.empty()
        self._table = table
        if file_path is not None:
            self.file_path = file_path
        self.clamped_page(self._view.page)
        logger.debug("Table replaced: %d rows", len(table))

    def apply(self, transition) -> ViewState:
        new_view = transition(self._view)
        if isinstance(new_view, ViewState):
            self._view = new_view
        return self._view

    def page_view(self) -> PageView:
        table = self._table
        view = self._view
        if (
            self._cache_key is not None
            and self._cache_key[0] is table
            and self._cache_key[1] is view
        ):
            return self._cache_value
        result = derive(table, view)
        self._cache_key = (table, view)
        self._cache_value = result
        return result

    def clamped_page(self, page) -> ViewState:
        return self.apply(lambda v: v.set_page(page, self.page_view().total_pages))
