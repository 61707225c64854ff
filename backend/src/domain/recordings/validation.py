"""Validation utilities for recordings delivered by the inbound-email webhook

Each check returns a (is_valid, error_message) tuple in the same shape as the
upload validators, so the intake service can surface the message verbatim.
"""

import os
import re
from typing import Optional, Tuple


# Only MPEG audio is accepted from the webhook
SUPPORTED_MIME_TYPES = {
    'audio/mpeg',
}

# 50 MiB, overridable via MAX_ATTACHMENT_BYTES in settings
MAX_ATTACHMENT_SIZE = 50 * 1024 * 1024

DEFAULT_RECORDING_FILENAME = "recording.mp3"

RECORDINGS_PREFIX = "recordings"


def validate_sender(sender: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Check that the webhook carried a sender address

    Example:
        >>> validate_sender("rep@example.com")
        (True, None)
        >>> validate_sender("   ")
        (False, 'No sender email found')
    """
    if not sender or not sender.strip():
        return False, "No sender email found"
    return True, None


def is_supported_mime_type(mime_type: Optional[str]) -> bool:
    """Check the declared media type of an attachment

    Parameters such as "; charset=binary" are ignored.

    Example:
        >>> is_supported_mime_type('audio/mpeg')
        True
        >>> is_supported_mime_type('audio/wav')
        False
    """
    if not mime_type:
        return False
    return mime_type.split(';')[0].strip().lower() in SUPPORTED_MIME_TYPES


def validate_attachment_size(size_bytes: int, max_size: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    """Validate attachment size is within limits

    The limit is inclusive: a file of exactly max_size bytes is accepted.

    Example:
        >>> validate_attachment_size(1024)
        (True, None)
        >>> validate_attachment_size(52_428_801)
        (False, 'File size exceeds 50MB limit')
    """
    if max_size is None:
        max_size = MAX_ATTACHMENT_SIZE

    if size_bytes > max_size:
        return False, f"File size exceeds {max_size // (1024 * 1024)}MB limit"

    return True, None


def sanitize_filename(filename: Optional[str]) -> str:
    """Sanitize an attachment filename for use in a storage key

    Path components are dropped and characters outside [word . - space] are
    replaced with underscores. Empty names fall back to "recording.mp3".

    Example:
        >>> sanitize_filename('../../call.mp3')
        'call.mp3'
        >>> sanitize_filename('call (final).mp3')
        'call_final_.mp3'
        >>> sanitize_filename(None)
        'recording.mp3'
    """
    if not filename:
        return DEFAULT_RECORDING_FILENAME

    # Remove path components (both separators, whatever the host OS)
    filename = os.path.basename(filename.replace('\\', '/'))

    filename = re.sub(r'[^\w\s.-]', '_', filename)
    filename = re.sub(r'[\s_]+', '_', filename)
    filename = filename.strip('.')

    if not filename:
        return DEFAULT_RECORDING_FILENAME

    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:255 - len(ext)] + ext

    return filename


def recording_key(filename: Optional[str]) -> str:
    """Storage key for a recording: recordings/<sanitized filename>

    Example:
        >>> recording_key('call.mp3')
        'recordings/call.mp3'
    """
    return f"{RECORDINGS_PREFIX}/{sanitize_filename(filename)}"
