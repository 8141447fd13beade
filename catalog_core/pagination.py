# Page arithmetic for the catalog listing. Pages are 1-based.


def page_count(total_count: int, page_size: int) -> int:
    """Number of pages needed to show `total_count` items, `page_size` per page."""
    return (total_count + page_size - 1) // page_size


def offset(current_page: int, page_size: int) -> int:
    """Record offset of the first item on `current_page`.

    Not clamped: a page past the last one gives an offset past the end and
    the backend answers with an empty list.
    """
    return page_size * (current_page - 1)
