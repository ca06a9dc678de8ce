import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, file_path, loading,
                  page, page_total, page_start, page_end, total_rows, page_size
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        if context.get("loading"):
            fname = f"{fname} (loading…)" if fname else "(loading…)"
        page = context.get("page", 1)
        page_total = context.get("page_total", 0)
        page_start = context.get("page_start", 0)
        page_end = context.get("page_end", page_start)
        total_rows = context.get("total_rows", 0)
        page_size = context.get("page_size", 0)
        if total_rows:
            rows_info = f"rows {page_start + 1}-{max(page_start + 1, page_end)} of {total_rows}"
        else:
            rows_info = "no rows"
        page_info = f"Page {page} of {page_total} | {rows_info} | {page_size}/page"
        text = f" {fname} | {page_info}" if fname else f" {page_info}"

    return text.ljust(width)[:width]
