"""Utility modules for reclaim.

This module exports commonly used utility functions.
"""

from reclaim.utils.formatting import (
    console,
    create_record_table,
    err_console,
    format_size_mb,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_record_table",
    "err_console",
    "format_size_mb",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
