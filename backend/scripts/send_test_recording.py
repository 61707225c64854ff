#!/usr/bin/env python3
"""Test Recording Sender for the email intake webhook.

Posts a recording to /api/v1/process-email the way the inbound-email
provider does: a multipart form with "sender" and "attachment-1".

Usage:
    # Send an existing recording
    python scripts/send_test_recording.py --from rep@example.com \
        --attachment call.mp3

    # Send a generated silent recording to a remote instance
    python scripts/send_test_recording.py --from rep@example.com \
        --generate-mp3 demo.mp3 --url https://analyzer.example.com

    # Override the declared media type (exercise the rejection path)
    python scripts/send_test_recording.py --from rep@example.com \
        --attachment notes.wav --content-type audio/wav
"""

import argparse
import sys
from pathlib import Path

import httpx

WEBHOOK_PATH = "/api/v1/process-email"

# MPEG-1 Layer III frame header (128 kbit/s, 44.1 kHz) padded to one frame
_SILENT_FRAME = b"\xff\xfb\x90\x64" + b"\x00" * 413


def generate_silent_mp3(seconds: int = 1) -> bytes:
    """Roughly `seconds` of silent MPEG audio (38 frames per second)."""
    return _SILENT_FRAME * (38 * seconds)


def send_recording(
    url: str,
    sender: str,
    filename: str,
    content: bytes,
    content_type: str = "audio/mpeg",
    timeout: float = 60.0,
) -> httpx.Response:
    """POST one recording to the intake webhook.

    Returns:
        httpx.Response: The webhook's response (200 or 400 with {"error"})
    """
    return httpx.post(
        url.rstrip("/") + WEBHOOK_PATH,
        data={"sender": sender},
        files={"attachment-1": (filename, content, content_type)},
        timeout=timeout,
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Send a test recording to the consultation intake webhook',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--from',
        dest='sender',
        required=True,
        help='Sender email address (e.g., rep@example.com)'
    )
    parser.add_argument(
        '--url',
        default='http://localhost:8000',
        help='Base URL of the analyzer (default: http://localhost:8000)'
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--attachment',
        help='Recording file to send'
    )
    source.add_argument(
        '--generate-mp3',
        metavar='FILENAME',
        help='Generate a silent MP3 and send it under the given filename'
    )

    parser.add_argument(
        '--seconds',
        type=int,
        default=5,
        help='Length of the generated recording in seconds (default: 5)'
    )
    parser.add_argument(
        '--content-type',
        default='audio/mpeg',
        help='Declared media type of the attachment (default: audio/mpeg)'
    )

    args = parser.parse_args()

    if args.attachment:
        path = Path(args.attachment)
        if not path.is_file():
            parser.error(f"Attachment not found: {path}")
        filename, content = path.name, path.read_bytes()
    else:
        filename, content = args.generate_mp3, generate_silent_mp3(args.seconds)

    try:
        response = send_recording(
            url=args.url,
            sender=args.sender,
            filename=filename,
            content=content,
            content_type=args.content_type,
        )
    except httpx.HTTPError as e:
        print(f"ERROR sending recording: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{response.status_code} {response.text}")
    if not response.is_success:
        sys.exit(1)


if __name__ == '__main__':
    main()
