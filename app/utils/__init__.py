"""Utility helper functions."""

from app.utils.helpers import as_utc, error_example, get_summary, host, today_str, utc_now

__all__ = [
    "as_utc",
    "error_example",
    "get_summary",
    "host",
    "today_str",
    "utc_now",
]
