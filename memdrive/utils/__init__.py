"""
Utility Functions

Helper functions used throughout the package.

Modules:
    media: MIME classification and human readable sizes/dates
"""

from memdrive.utils.media import (
    file_category,
    format_bytes,
    format_date,
    format_time_ago,
    guess_mime_type,
    is_previewable,
    preview_kind,
)

__all__ = [
    "file_category",
    "format_bytes",
    "format_date",
    "format_time_ago",
    "guess_mime_type",
    "is_previewable",
    "preview_kind",
]
