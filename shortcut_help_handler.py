class ShortcutHelpHandler:
    BINDINGS = [
        ("h / l, Left / Right", "move the column cursor"),
        ("0 / $", "first / last column"),
        ("j / k, Down / Up", "scroll the rows of the current page"),
        ("s, Enter", "sort by the current column (again to flip direction)"),
        ("/", "filter the current column (Enter keep, Esc cancel)"),
        ("n / p, PgDn / PgUp", "next / previous page"),
        ("g / G", "first / last page"),
        ("+ / -", "more / fewer rows per page"),
        ("c", "clear filters and sort"),
        ("r", "reload the file"),
        ("?", "toggle this help"),
        ("q, Ctrl+X", "quit"),
    ]

    @classmethod
    def get_lines(cls):
        width = max(len(keys) for keys, _ in cls.BINDINGS)
        lines = ["Keys", ""]
        for keys, desc in cls.BINDINGS:
            lines.append(f"  {keys.ljust(width)}  {desc}")
        return lines
