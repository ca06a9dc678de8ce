import curses
from typing import Callable, Optional


class FilterPrompt:
    """Single-line editor for one column's filter text.

    Every edit is pushed through on_change so the table narrows while typing;
    Esc restores the value the prompt started with.
    """

    def __init__(
        self,
        on_change: Callable[[str, str], None],
        set_status_cb: Callable[[str, int], None],
    ):
        self._on_change = on_change
        self._set_status = set_status_cb

        self.active = False
        self.column: Optional[str] = None
        self.original = ""
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    # ---------- public API ----------
    def start(self, column: str, current_value: str = ""):
        self.active = True
        self.column = column
        self.original = current_value or ""
        self.buffer = self.original
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13, curses.KEY_ENTER):  # Enter
            if self.buffer:
                self._set_status(f"Filter {self.column}: {self.buffer}", 3)
            else:
                self._set_status(f"Filter cleared on {self.column}", 3)
            self._reset()
            return

        if ch == 27:  # Esc
            if self.buffer != self.original:
                self._on_change(self.column, self.original)
            self._set_status("Filter canceled", 3)
            self._reset()
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
                self._on_change(self.column, self.buffer)
            return

        if ch == curses.KEY_DC:
            if self.cursor < len(self.buffer):
                self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
                self._on_change(self.column, self.buffer)
            return

        if ch == 21:  # Ctrl+U
            if self.buffer:
                self.buffer = ""
                self.cursor = 0
                self._on_change(self.column, self.buffer)
            return

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            self._on_change(self.column, self.buffer)
            return

    def draw(self, win):
        if not self.active:
            return

        prompt = f"Filter {self.column}: "
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        end = start + text_w
        visible = self.buffer[start:end]

        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()

    # ---------- internals ----------
    def _reset(self):
        self.active = False
        self.column = None
        self.original = ""
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
