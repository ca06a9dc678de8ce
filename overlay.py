import curses


CLOSE_KEYS = {27, ord("q"), ord("?"), 10, 13, curses.KEY_ENTER}
LINE_STEPS = {
    ord("j"): 1,
    curses.KEY_DOWN: 1,
    ord("k"): -1,
    curses.KEY_UP: -1,
}


class HelpOverlay:
    """Boxed key reference drawn over the grid, scrollable when it does not fit."""

    FOOTER = " q/Esc close "

    def __init__(self, layout, make_win=curses.newwin):
        self.layout = layout
        self.make_win = make_win
        self.lines = []
        self.top = 0
        self.win = None

    @property
    def visible(self):
        return self.win is not None

    def open_help(self, lines):
        self.lines = list(lines or [])
        self.top = 0
        width = max([len(line) for line in self.lines] + [len(self.FOOTER)]) + 4
        width = min(self.layout.W, width)
        height = min(max(3, self.layout.table_h), len(self.lines) + 2)
        y = max(0, (self.layout.table_h - height) // 2)
        x = max(0, (self.layout.W - width) // 2)
        self.win = self.make_win(height, width, y, x)

    def close(self):
        self.win = None
        self.lines = []
        self.top = 0

    def _page_rows(self):
        h, _ = self.win.getmaxyx()
        return max(1, h - 2)

    def _last_top(self):
        return max(0, len(self.lines) - self._page_rows())

    def handle_key(self, ch):
        if not self.visible or ch == -1:
            return
        if ch in CLOSE_KEYS:
            self.close()
            return

        if ch in LINE_STEPS:
            self.top += LINE_STEPS[ch]
        elif ch == curses.KEY_NPAGE:
            self.top += self._page_rows()
        elif ch == curses.KEY_PPAGE:
            self.top -= self._page_rows()
        elif ch == curses.KEY_HOME:
            self.top = 0
        elif ch == curses.KEY_END:
            self.top = self._last_top()
        self.top = max(0, min(self.top, self._last_top()))

    def draw(self):
        if not self.visible:
            return
        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        try:
            win.box()
        except curses.error:
            pass

        shown = self.lines[self.top : self.top + self._page_rows()]
        for y, line in enumerate(shown, start=1):
            self._put(win, y, 2, line, w - 3)
        if w > len(self.FOOTER) + 2:
            self._put(win, h - 1, w - len(self.FOOTER) - 2, self.FOOTER, len(self.FOOTER))
        win.refresh()

    @staticmethod
    def _put(win, y, x, text, n):
        if n <= 0:
            return
        try:
            win.addnstr(y, x, text, n)
        except curses.error:
            pass
