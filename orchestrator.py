# ~/Apps/csvpeek/orchestrator.py
import curses
import logging
import time

from grid_pane import GridPane
from screen_layout import ScreenLayout
from filter_prompt import FilterPrompt
from loading_screen import BackgroundLoader, LoadState
from overlay import HelpOverlay
from shortcut_help_handler import ShortcutHelpHandler
from status_bar import render_status
from view_controller import ViewController


logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(self, stdscr, app_state, file_handler=None):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.state = app_state
        self.file_handler = file_handler
        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane(app_state.page_view())
        self.overlay = HelpOverlay(self.layout)

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        self.filter_prompt = FilterPrompt(self._on_filter_change, self._set_status)
        self.controller = ViewController(
            self.state, self.grid, self.filter_prompt, self._set_status
        )

        # ---- reload ----
        self.reload_state = None

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _on_filter_change(self, column, value):
        self.controller.set_filter(column, value)

    def _start_reload(self):
        if self.file_handler is None:
            self._set_status("No file to reload", 3)
            return
        if self.reload_state is not None:
            return
        self.reload_state = LoadState()
        BackgroundLoader(self.file_handler.load, self.reload_state).start()
        self._set_status(f"Reloading {self.file_handler.name}", 2)

    def _poll_reload(self):
        load = self.reload_state
        if load is None:
            return
        if load.loaded:
            # the previous table stays visible until the new one is complete
            self.state.replace_table(load.table, self.file_handler.path)
            self.controller.sync_grid()
            self._set_status(f"Reloaded {self.file_handler.name}", 3)
            self.reload_state = None
        elif load.aborted:
            self._set_status(f"Reload failed: {load.error}", 4)
            self.reload_state = None

    # ---------------- UI ----------------

    def _status_context(self):
        view = self.state.page_view()
        return {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "file_path": self.state.file_path,
            "loading": self.reload_state is not None,
            "page": view.page,
            "page_total": view.total_pages,
            "page_start": view.page_start,
            "page_end": view.page_end,
            "total_rows": view.total_rows,
            "page_size": view.page_size,
        }

    def redraw(self):
        if self.overlay.visible:
            self.overlay.draw()
            return

        try:
            curses.curs_set(1 if self.filter_prompt.active else 0)
        except curses.error:
            pass

        self.grid.draw(self.layout.table_win)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        try:
            sw.addnstr(0, 0, render_status(self._status_context(), w), w, curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

        pw = self.layout.prompt_win
        pw.erase()
        if self.filter_prompt.active:
            self.filter_prompt.draw(pw)
        else:
            pw.refresh()

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()
            self._poll_reload()

            if ch in (3, 24):  # Ctrl+C / Ctrl+X
                break

            if ch == -1:
                self.redraw()
                continue

            if self.overlay.visible:
                self.overlay.handle_key(ch)
                self.redraw()
                continue

            if self.filter_prompt.active:
                self.filter_prompt.handle_key(ch)
                self.redraw()
                continue

            if ch == ord("q"):
                break
            if ch == ord("?"):
                self.overlay.open_help(ShortcutHelpHandler.get_lines())
            elif ch == ord("r"):
                self._start_reload()
            else:
                self.controller.handle_key(ch)

            self.redraw()
