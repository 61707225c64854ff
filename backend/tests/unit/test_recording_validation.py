"""Unit tests for recording validation utilities"""

import pytest

from domain.recordings import (
    DEFAULT_RECORDING_FILENAME,
    MAX_ATTACHMENT_SIZE,
    SUPPORTED_MIME_TYPES,
    is_supported_mime_type,
    recording_key,
    sanitize_filename,
    validate_attachment_size,
    validate_sender,
)


class TestSenderValidation:
    """Test sender presence checks"""

    def test_sender_present(self):
        assert validate_sender("rep@example.com") == (True, None)

    @pytest.mark.parametrize("sender", [None, "", "   "])
    def test_sender_missing(self, sender):
        is_valid, error = validate_sender(sender)
        assert is_valid is False
        assert error == "No sender email found"

    def test_sender_is_not_format_checked(self):
        """Anything non-empty is accepted; the address is an opaque key"""
        assert validate_sender("not-an-email")[0] is True


class TestMimeTypeValidation:
    """Test MIME type validation for attachments"""

    def test_only_mpeg_supported(self):
        assert SUPPORTED_MIME_TYPES == {'audio/mpeg'}

    def test_mpeg_supported(self):
        assert is_supported_mime_type('audio/mpeg') is True

    def test_mpeg_with_parameters_supported(self):
        assert is_supported_mime_type('audio/mpeg; charset=binary') is True
        assert is_supported_mime_type('Audio/MPEG') is True

    @pytest.mark.parametrize("mime_type", ['audio/wav', 'audio/mp4', 'application/pdf', 'text/plain'])
    def test_other_types_rejected(self, mime_type):
        assert is_supported_mime_type(mime_type) is False

    def test_missing_type_rejected(self):
        assert is_supported_mime_type(None) is False
        assert is_supported_mime_type('') is False


class TestAttachmentSizeValidation:
    """Test the 50 MiB attachment limit"""

    def test_limit_is_50_mib(self):
        assert MAX_ATTACHMENT_SIZE == 52_428_800

    def test_exact_limit_accepted(self):
        assert validate_attachment_size(52_428_800) == (True, None)

    def test_one_byte_over_rejected(self):
        is_valid, error = validate_attachment_size(52_428_801)
        assert is_valid is False
        assert error == "File size exceeds 50MB limit"

    def test_empty_attachment_accepted(self):
        assert validate_attachment_size(0) == (True, None)

    def test_custom_limit(self):
        assert validate_attachment_size(10, max_size=10)[0] is True
        assert validate_attachment_size(11, max_size=10)[0] is False


class TestFilenameSanitization:
    """Test storage key derivation from attachment filenames"""

    def test_plain_name_unchanged(self):
        assert sanitize_filename('call.mp3') == 'call.mp3'

    def test_path_components_removed(self):
        assert sanitize_filename('../../etc/call.mp3') == 'call.mp3'
        assert sanitize_filename('C:\\Users\\rep\\call.mp3') == 'call.mp3'

    def test_special_characters_replaced(self):
        assert sanitize_filename('call (final).mp3') == 'call_final_.mp3'

    def test_empty_name_falls_back(self):
        assert sanitize_filename(None) == DEFAULT_RECORDING_FILENAME
        assert sanitize_filename('') == DEFAULT_RECORDING_FILENAME
        assert sanitize_filename('...') == DEFAULT_RECORDING_FILENAME

    def test_long_name_truncated_keeping_extension(self):
        result = sanitize_filename('a' * 300 + '.mp3')
        assert len(result) == 255
        assert result.endswith('.mp3')

    def test_recording_key_prefix(self):
        assert recording_key('call.mp3') == 'recordings/call.mp3'
        assert recording_key(None) == 'recordings/recording.mp3'
