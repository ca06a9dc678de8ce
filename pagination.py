PAGE_SIZE_OPTIONS = (5, 10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 10


def total_pages(total_rows: int, page_size: int) -> int:
    if total_rows <= 0 or page_size <= 0:
        return 0
    return (total_rows - 1) // page_size + 1


def clamp_page(page: int, page_count: int) -> int:
    """Clamp to [1, max(page_count, 1)]; an empty result still shows page 1."""
    max_page = max(page_count, 1)
    return max(1, min(page, max_page))


def page_bounds(page: int, page_size: int, total_rows: int) -> tuple[int, int]:
    """Slice bounds for a 1-based page, clamped to the available rows."""
    if page < 1 or page_size <= 0:
        return 0, 0
    start = min(total_rows, (page - 1) * page_size)
    end = min(total_rows, page * page_size)
    return start, end


def next_page_size(page_size: int, step: int = 1) -> int:
    if page_size not in PAGE_SIZE_OPTIONS:
        return DEFAULT_PAGE_SIZE
    idx = PAGE_SIZE_OPTIONS.index(page_size) + step
    idx = max(0, min(idx, len(PAGE_SIZE_OPTIONS) - 1))
    return PAGE_SIZE_OPTIONS[idx]
