from typing import Dict


def page_window(page: int, limit: int):
    """Return (start_index, end_index) for a 1-based page."""
    start_index = (page - 1) * limit
    return start_index, page * limit


def build_pagination(total: int, page: int, limit: int) -> Dict[str, Dict[str, int]]:
    """
    Build the `pagination` block for a list response.

    total=25, limit=10, page=2 -> {"next": {"page": 3, ...}, "prev": {"page": 1, ...}}
    total=25, limit=10, page=3 -> {"prev": {"page": 2, ...}}
    """
    start_index, end_index = page_window(page, limit)
    pagination = {}
    if end_index < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start_index > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination
