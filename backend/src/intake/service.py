"""Email intake service

Runs one webhook delivery through validate -> upload -> forward. Nothing is
written until every validation check has passed. There is no retry and no
idempotency key: delivering the same attachment name twice overwrites the
stored object and creates a second consultation.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import UploadFile

from domain.recordings import (
    MAX_ATTACHMENT_SIZE,
    is_supported_mime_type,
    recording_key,
    validate_attachment_size,
    validate_sender,
)
from domain.recordings.ports import RecordingStoragePort
from observability import REQUEST_ID_HEADER, request_id_var
from observability.metrics import downstream_latency_seconds

from .errors import DownstreamError, IntakeValidationError
from .schemas import ForwardedConsultation

logger = logging.getLogger(__name__)

RECORDING_CONTENT_TYPE = "audio/mpeg"

CONSULTATION_ENDPOINT = "/api/v1/process-consultation"


@dataclass
class IntakeResult:
    sender: str
    storage_key: str
    audio_url: str
    size_bytes: int


class EmailIntakeService:
    """Accepts a recording from the inbound-email webhook.

    Args:
        storage: Recording store the attachment is written to
        client: HTTP client whose base_url points at the consultation service
        max_attachment_bytes: Largest accepted attachment
    """

    def __init__(
        self,
        storage: RecordingStoragePort,
        client: httpx.AsyncClient,
        max_attachment_bytes: int = MAX_ATTACHMENT_SIZE,
    ):
        self.storage = storage
        self.client = client
        self.max_attachment_bytes = max_attachment_bytes

    async def process(
        self,
        sender: Optional[str],
        attachment: Optional[UploadFile],
    ) -> IntakeResult:
        """Validate, store and forward one webhook delivery.

        Raises:
            IntakeValidationError: Missing sender, missing/non-MP3 attachment,
                or attachment over the size limit
            StorageError: If the upload fails
            DownstreamError: If the consultation-creation call fails
        """
        is_valid, error_msg = validate_sender(sender)
        if not is_valid:
            raise IntakeValidationError(error_msg)
        sender = sender.strip()

        if attachment is None or not is_supported_mime_type(attachment.content_type):
            raise IntakeValidationError("No valid MP3 attachment found")

        # Reject on the declared size first so oversized bodies are never buffered twice
        if attachment.size is not None:
            self._check_size(attachment.size)

        data = await attachment.read()
        self._check_size(len(data))

        key = recording_key(attachment.filename)
        stored = await self.storage.upload(
            key=key,
            data=data,
            content_type=RECORDING_CONTENT_TYPE,
            upsert=True,
        )
        audio_url = self.storage.public_url(stored.key)

        logger.info(
            f"Stored recording: key={stored.key}, size={stored.size_bytes}",
            extra={"sender": sender, "storage_key": stored.key},
        )

        await self._forward(sender, audio_url)

        return IntakeResult(
            sender=sender,
            storage_key=stored.key,
            audio_url=audio_url,
            size_bytes=stored.size_bytes,
        )

    def _check_size(self, size_bytes: int) -> None:
        is_valid, error_msg = validate_attachment_size(size_bytes, self.max_attachment_bytes)
        if not is_valid:
            raise IntakeValidationError(error_msg)

    async def _forward(self, sender: str, audio_url: str) -> None:
        """POST {email, audioUrl} to the consultation-creation endpoint."""
        body = ForwardedConsultation(email=sender, audio_url=audio_url)

        request_id = request_id_var.get()
        headers = {REQUEST_ID_HEADER: request_id} if request_id else {}

        start = time.time()
        try:
            response = await self.client.post(
                CONSULTATION_ENDPOINT,
                json=body.model_dump(by_alias=True),
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"Consultation call failed: {e}", extra={"sender": sender})
            raise DownstreamError() from e
        finally:
            downstream_latency_seconds.observe(time.time() - start)

        if not response.is_success:
            logger.error(
                f"Consultation call returned {response.status_code}: {response.text[:500]}",
                extra={"sender": sender, "status_code": response.status_code},
            )
            raise DownstreamError(status_code=response.status_code)
