import curses
import locale
import logging
import os
import sys

from app_state import AppState
from config_paths import LOG_PATH, load_config
from csv_parser import ParsedTable
from file_type_handler import FileTypeHandler

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = "csvpeek - terminal CSV viewer\n\nUsage:\n  csvpeek [path]\n  csvpeek -v\n"


def configure_logging(level: str, path: str = LOG_PATH) -> None:
    """Send log records to a file; the terminal belongs to curses."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.WARNING))


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args or len(args) > 1:
        print(USAGE)
        return 0

    cfg = load_config()
    configure_logging(cfg["LOG_LEVEL"])
    # curses needs the user locale to draw non-ASCII cells
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logging.getLogger(__name__).warning("Locale not supported; non-ASCII text may not render")

    path = args[0] if args else None
    handler = FileTypeHandler(path) if path else None

    from loading_screen import LoadingScreen, LoadState

    load_state = LoadState()

    def load_table():
        if handler:
            return handler.load()
        return ParsedTable.empty()

    def curses_main(stdscr):
        loader = LoadingScreen(stdscr, load_table, load_state, label=handler.name if handler else "")
        loader.run()
        if load_state.aborted:
            return
        state = AppState(load_state.table, path, page_size=cfg["ROWS_PER_PAGE"])
        Orchestrator(stdscr, state, handler).run()

    curses.wrapper(curses_main)

    if load_state.error:
        print(f"Load failed: {load_state.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
