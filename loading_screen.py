import curses
import logging
import threading
import time


logger = logging.getLogger(__name__)


class LoadState:
    def __init__(self):
        self.loaded = False
        self.aborted = False
        self.table = None
        self.error = None


class BackgroundLoader:
    """Run loader_fn on a daemon thread and report into a LoadState.

    on_done, when given, is called from the worker thread once the result
    (or the error) has been recorded. A read cannot be cancelled; an aborted
    state only discards the result.
    """

    def __init__(self, loader_fn, load_state: LoadState, on_done=None):
        self.loader_fn = loader_fn
        self.state = load_state
        self.on_done = on_done
        self.thread = None

    def start(self):
        self.thread = threading.Thread(target=self._load, daemon=True)
        self.thread.start()
        return self.thread

    def _load(self):
        if self.state.aborted:
            return
        try:
            table = self.loader_fn()
        except Exception as exc:
            logger.exception("Load failed: %s", exc)
            self.state.error = exc
            self.state.aborted = True
        else:
            if not self.state.aborted:
                self.state.table = table
                self.state.loaded = True
        if self.on_done is not None:
            self.on_done(self.state)


class LoadingScreen:
    SPINNER = "|/-\\"

    def __init__(self, stdscr, loader_fn, load_state: LoadState, label=""):
        self.stdscr = stdscr
        self.state = load_state
        self.label = label
        self.loader = BackgroundLoader(loader_fn, load_state)
        self.frame = 0

    def run(self):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.nodelay(True)
        self.loader.start()
        while not self.state.aborted and not self.state.loaded:
            self.draw()
            ch = self.stdscr.getch()
            if ch == 24:  # Ctrl+X
                self.state.aborted = True
                break
            time.sleep(0.03)
        self.stdscr.nodelay(False)

    def draw(self):
        self.stdscr.erase()
        h, w = self.stdscr.getmaxyx()
        glyph = self.SPINNER[self.frame % len(self.SPINNER)]
        self.frame += 1
        text = f"{glyph} Loading {self.label}".rstrip()
        hint = "Ctrl+X to abort"
        y = max(0, h // 2 - 1)
        try:
            self.stdscr.addnstr(y, max(0, (w - len(text)) // 2), text, w)
            self.stdscr.addnstr(y + 1, max(0, (w - len(hint)) // 2), hint, w, curses.A_DIM)
        except curses.error:
            pass
        self.stdscr.refresh()
