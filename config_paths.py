import json
import logging
import os

from pagination import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS


logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "csvpeek")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "csvpeek.log")

# default settings
ROWS_PER_PAGE_DEFAULT = DEFAULT_PAGE_SIZE
LOG_LEVEL_DEFAULT = "WARNING"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def load_config():
    cfg = {
        "ROWS_PER_PAGE": ROWS_PER_PAGE_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    rows = data.get("rows_per_page")
    if isinstance(rows, int) and not isinstance(rows, bool) and rows in PAGE_SIZE_OPTIONS:
        cfg["ROWS_PER_PAGE"] = rows

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
