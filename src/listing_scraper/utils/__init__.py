"""
Shared utility functions for the listing scraper.
"""

from .io import (
    write_json_file,
    flatten_records,
    safe_write_csv_with_backup,
    write_records_csv,
)
from .logging_config import configure_logging

__all__ = [
    "write_json_file",
    "flatten_records",
    "safe_write_csv_with_backup",
    "write_records_csv",
    "configure_logging",
]
