"""
Media Utilities

Classification and display helpers for file metadata.
"""

from __future__ import annotations

import mimetypes
from datetime import datetime, timezone

from memdrive.types.results import FileCategory, PreviewKind

_BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]

# (seconds per unit, label), largest first
_AGE_UNITS = [
    (31536000, "years"),
    (2592000, "months"),
    (86400, "days"),
    (3600, "hours"),
    (60, "minutes"),
]

DEFAULT_MIME_TYPE = "application/octet-stream"


def preview_kind(mime_type: str) -> PreviewKind | None:
    """Viewer for a MIME type, or None if it cannot be previewed."""
    if mime_type.startswith("image/"):
        return PreviewKind.IMAGE
    if mime_type.startswith("video/"):
        return PreviewKind.VIDEO
    return None


def is_previewable(mime_type: str) -> bool:
    """True for image/* and video/* types."""
    return preview_kind(mime_type) is not None


def file_category(mime_type: str) -> FileCategory:
    """Coarse category for icons and labels."""
    if mime_type.startswith("image/"):
        return FileCategory.IMAGE
    if mime_type == "application/pdf":
        return FileCategory.PDF
    if mime_type.startswith("video/"):
        return FileCategory.VIDEO
    if mime_type.startswith("audio/"):
        return FileCategory.AUDIO
    if mime_type.startswith("text/"):
        return FileCategory.TEXT
    return FileCategory.OTHER


def guess_mime_type(name: str) -> str:
    """MIME type from a file name's extension."""
    guessed, _ = mimetypes.guess_type(name, strict=False)
    return guessed or DEFAULT_MIME_TYPE


def format_bytes(size: int, decimals: int = 2) -> str:
    """
    Human readable size in base 1024.

    Examples:
        0 -> "0 Bytes", 1024 -> "1 KB", 1572864 -> "1.5 MB"
    """
    if size == 0:
        return "0 Bytes"
    places = max(decimals, 0)
    index = 0
    while size >= 1024 ** (index + 1) and index < len(_BYTE_UNITS) - 1:
        index += 1
    value = round(size / 1024**index, places)
    text = f"{value:.{places}f}".rstrip("0").rstrip(".") if places else f"{value:.0f}"
    return f"{text} {_BYTE_UNITS[index]}"


def format_time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """
    Relative age such as "3 days ago".

    A unit is used once the age exceeds one whole unit, so 90 seconds is
    "1 minutes ago" and 60 seconds is "just now".
    """
    now = now or datetime.now(timezone.utc)
    seconds = (now - timestamp).total_seconds()
    for unit_seconds, label in _AGE_UNITS:
        interval = seconds / unit_seconds
        if interval > 1:
            return f"{int(interval)} {label} ago"
    return "just now"


def format_date(timestamp: datetime) -> str:
    """Long date such as "March 5, 2024"."""
    return f"{timestamp.strftime('%B')} {timestamp.day}, {timestamp.year}"
