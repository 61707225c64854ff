"""Recordings domain module - webhook attachment validation and storage keys"""

from .validation import (
    validate_sender,
    is_supported_mime_type,
    validate_attachment_size,
    sanitize_filename,
    recording_key,
    SUPPORTED_MIME_TYPES,
    MAX_ATTACHMENT_SIZE,
    DEFAULT_RECORDING_FILENAME,
    RECORDINGS_PREFIX,
)

__all__ = [
    "validate_sender",
    "is_supported_mime_type",
    "validate_attachment_size",
    "sanitize_filename",
    "recording_key",
    "SUPPORTED_MIME_TYPES",
    "MAX_ATTACHMENT_SIZE",
    "DEFAULT_RECORDING_FILENAME",
    "RECORDINGS_PREFIX",
]
