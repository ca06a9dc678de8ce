import curses

from pagination import next_page_size
from view_state import ASC


class ViewController:
    """Maps view-mode keys onto view-state transitions."""

    def __init__(self, state, grid, filter_prompt, set_status_cb):
        self.state = state
        self.grid = grid
        self.filter_prompt = filter_prompt
        self._set_status = set_status_cb

    def sync_grid(self):
        self.grid.set_view(self.state.page_view())

    # ---------- transitions ----------
    def set_filter(self, column, value):
        self.state.apply(lambda v: v.set_filter(column, value))
        self.sync_grid()

    def sort_current(self):
        column = self.grid.current_column()
        if column is None:
            return
        view = self.state.apply(lambda v: v.set_sort(column))
        label = "ascending" if view.sort.direction == ASC else "descending"
        self._set_status(f"Sorted by {column} ({label})", 2)
        self.sync_grid()

    def change_page_size(self, step):
        size = next_page_size(self.state.view.page_size, step)
        self.state.apply(lambda v: v.set_page_size(size))
        self._set_status(f"{size} rows per page", 2)
        self.sync_grid()

    def next_page(self):
        total = self.state.page_view().total_pages
        self.state.apply(lambda v: v.next_page(total))
        self.sync_grid()

    def prev_page(self):
        self.state.apply(lambda v: v.prev_page())
        self.sync_grid()

    def first_page(self):
        self.state.clamped_page(1)
        self.sync_grid()

    def last_page(self):
        self.state.clamped_page(self.state.page_view().total_pages)
        self.sync_grid()

    def clear_view(self):
        self.state.apply(lambda v: v.clear_view())
        self._set_status("View cleared", 2)
        self.sync_grid()

    def start_filter(self):
        column = self.grid.current_column()
        if column is None:
            self._set_status("No columns to filter", 2)
            return
        self.filter_prompt.start(column, self.state.view.filter_value(column))

    # ---------- keys ----------
    def handle_key(self, ch):
        if ch in (ord("h"), curses.KEY_LEFT):
            self.grid.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            self.grid.move_right()
        elif ch in (ord("j"), curses.KEY_DOWN):
            self.grid.scroll_rows(1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.grid.scroll_rows(-1)
        elif ch in (ord("0"), ord("^")):
            self.grid.jump_first_col()
        elif ch == ord("$"):
            self.grid.jump_last_col()
        elif ch in (ord("s"), 10, 13, curses.KEY_ENTER):
            self.sort_current()
        elif ch == ord("/"):
            self.start_filter()
        elif ch in (ord("+"), ord("=")):
            self.change_page_size(1)
        elif ch in (ord("-"), ord("_")):
            self.change_page_size(-1)
        elif ch in (ord("n"), ord("]"), curses.KEY_NPAGE):
            self.next_page()
        elif ch in (ord("p"), ord("["), curses.KEY_PPAGE):
            self.prev_page()
        elif ch == ord("g"):
            self.first_page()
        elif ch == ord("G"):
            self.last_page()
        elif ch == ord("c"):
            self.clear_view()
        else:
            return False
        return True
