"""
Utility functions for the Uploadcare SDK.

Helpers shared by the transport, the models and the CLI: datetime
conversion, file chunking and human-readable sizes.
"""

import math
import time
from datetime import datetime, timezone
from email.utils import formatdate
from typing import Any, BinaryIO, Iterator, Optional

MULTIPART_CHUNK_SIZE = 5 * 1024 * 1024  # 5MB, required by the multipart API


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an API datetime string into an aware datetime.

    Args:
        value: ISO 8601 string such as ``2018-11-05T13:14:41.123Z``

    Returns:
        datetime object, or None when the value is empty
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # values without an offset, such as EXIF original times, are read as UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def http_date(timestamp: Optional[float] = None) -> str:
    """Format a timestamp as an RFC 1123 ``Date`` header value in GMT."""
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def bool_param(value: bool) -> str:
    """Render a boolean the way the API expects it in query strings and JSON."""
    return "true" if value else "false"


def compact(data: dict) -> dict:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


def enum_value(value: Any) -> Any:
    """Unwrap an Enum member, pass anything else through."""
    return getattr(value, "value", value)


def chunk_file(file_obj: BinaryIO, chunk_size: int = MULTIPART_CHUNK_SIZE) -> Iterator[bytes]:
    """
    Read file in chunks.

    Args:
        file_obj: File object to read from
        chunk_size: Size of each chunk in bytes

    Yields:
        File chunks as bytes
    """
    while True:
        chunk = file_obj.read(chunk_size)
        if not chunk:
            break
        yield chunk


def format_file_size(size_bytes: Optional[int]) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if not size_bytes:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
    i = int(math.floor(math.log(size_bytes, 1024)))

    if i >= len(size_names):
        i = len(size_names) - 1

    p = math.pow(1024, i)
    size = round(size_bytes / p, 2)

    return f"{size} {size_names[i]}"


def mask_secret(value: str, visible: int = 4) -> str:
    """Hide all but the last few characters of a secret for logging."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
