# ~/Apps/csvpeek/grid_pane.py
import curses

from view_state import ASC, DESC


SORT_GLYPHS = {ASC: " ▲", DESC: " ▼"}


class GridPane:
    PAIR_CELL_TEXT = 1
    PAIR_FILTER_TEXT = 2
    MAX_COL_WIDTH = 40
    MIN_COL_WIDTH = 4

    def __init__(self, page_view=None):
        self.view = page_view
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_FILTER_TEXT, curses.COLOR_YELLOW, -1)
        except curses.error:
            pass

        self.curr_col = 0
        self.col_offset = 0
        self.row_offset = 0
        self.body_h = 0
        self.rendered_col_widths = {}

    @property
    def columns(self):
        return tuple(self.view.schema) if self.view is not None else ()

    def set_view(self, page_view):
        self.view = page_view
        total = len(self.columns)
        self.curr_col = max(0, min(self.curr_col, total - 1))
        self.col_offset = max(0, min(self.col_offset, max(0, total - 1)))
        self.row_offset = 0

    def current_column(self):
        cols = self.columns
        if not cols:
            return None
        return cols[self.curr_col]

    def header_label(self, col) -> str:
        indicator = self.view.sort_indicators.get(col) if self.view else None
        return f"{col}{SORT_GLYPHS.get(indicator, '')}"

    def filter_label(self, col) -> str:
        value = self.view.filter_values.get(col, "") if self.view else ""
        return f"/{value}" if value else ""

    def get_col_width(self, col_idx):
        cols = self.columns
        if col_idx < 0 or col_idx >= len(cols):
            return self.MAX_COL_WIDTH
        col = cols[col_idx]
        max_len = max(len(self.header_label(col)), len(self.filter_label(col)))
        for row in self.view.rows:
            max_len = max(max_len, len(str(row.get(col, ""))))
        return max(self.MIN_COL_WIDTH, min(self.MAX_COL_WIDTH, max_len + 2))

    def _row_label_width(self):
        last = self.view.page_end if self.view is not None else 0
        return max(3, len(str(last)) + 1)

    def adjust_col_viewport(self, win=None):
        """Shift col_offset so curr_col is inside the visible window."""
        cols = self.columns
        if not cols:
            self.col_offset = 0
            return

        if win is not None:
            _, w = win.getmaxyx()
        else:
            w = 120

        avail_w = max(20, w - (self._row_label_width() + 1))
        visible_count = self._visible_count(avail_w, self.col_offset)

        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col
        elif self.curr_col >= self.col_offset + visible_count:
            self.col_offset = self.curr_col - visible_count + 1

        self.col_offset = max(0, self.col_offset)
        max_possible_offset = max(0, len(cols) - visible_count)
        self.col_offset = min(self.col_offset, max_possible_offset)

    def _visible_count(self, avail_w, offset):
        used = 0
        count = 0
        for idx in range(offset, len(self.columns)):
            cw = self.get_col_width(idx)
            if used + cw + 1 > avail_w:
                break
            used += cw + 1
            count += 1
        return max(1, count)

    # ---------- navigation ----------
    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self):
        self.curr_col = max(0, min(len(self.columns) - 1, self.curr_col + 1))

    def jump_first_col(self):
        self.curr_col = 0
        self.col_offset = 0

    def jump_last_col(self):
        self.curr_col = max(0, len(self.columns) - 1)

    def _max_row_offset(self):
        rows = len(self.view.rows) if self.view is not None else 0
        return max(0, rows - self.body_h)

    def scroll_rows(self, delta):
        self.row_offset = max(0, min(self._max_row_offset(), self.row_offset + delta))

    # ---------- rendering ----------
    @staticmethod
    def _attr(pair):
        try:
            return curses.color_pair(pair)
        except curses.error:
            return 0

    def draw(self, win):
        win.erase()
        h, w = win.getmaxyx()
        cols = self.columns
        if not cols:
            # nothing loaded or nothing to show
            win.refresh()
            return

        self.adjust_col_viewport(win)
        row_w = self._row_label_width()
        avail_w = w - (row_w + 1)
        visible = range(
            self.col_offset,
            self.col_offset + self._visible_count(avail_w, self.col_offset),
        )
        visible = tuple(c for c in visible if c < len(cols))

        text_attr = self._attr(self.PAIR_CELL_TEXT)
        filter_attr = self._attr(self.PAIR_FILTER_TEXT)
        self.rendered_col_widths = {}

        x = row_w + 1
        for c in visible:
            eff_cw = min(self.get_col_width(c), max(1, w - x - 1))
            self.rendered_col_widths[c] = eff_cw
            attr = curses.A_BOLD | text_attr
            if c == self.curr_col:
                attr |= curses.A_REVERSE
            name = self.header_label(cols[c])[:eff_cw].ljust(eff_cw)
            self._put(win, 0, x, name, eff_cw, attr)
            flt = self.filter_label(cols[c])[:eff_cw].ljust(eff_cw)
            self._put(win, 1, x, flt, eff_cw, filter_attr)
            x += eff_cw + 1

        # rows below the header and filter lines
        self.body_h = max(0, h - 2)
        self.row_offset = min(self.row_offset, self._max_row_offset())
        shown = self.view.rows[self.row_offset : self.row_offset + self.body_h]

        y = 2
        for offset, row in enumerate(shown, start=self.row_offset):
            label = str(self.view.page_start + offset + 1).rjust(row_w)
            self._put(win, y, 0, label, row_w, curses.A_DIM)
            x = row_w + 1
            for c in visible:
                eff_cw = self.rendered_col_widths[c]
                cell = str(row.get(cols[c], ""))[:eff_cw].ljust(eff_cw)
                self._put(win, y, x, cell, eff_cw, text_attr)
                x += eff_cw + 1
            y += 1

        win.refresh()

    @staticmethod
    def _put(win, y, x, text, n, attr=0):
        try:
            win.addnstr(y, x, text, n, attr)
        except curses.error:
            pass
