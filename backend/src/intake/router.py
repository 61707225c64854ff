"""Email intake webhook

Provides POST /process-email for the inbound-email provider (Mailgun-style
form posts). The form carries the sender address in "sender" and the call
recording in "attachment-1".
"""

import logging
from typing import Annotated, Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, UploadFile

from config import Settings, get_settings
from cors import cors_error, cors_json, preflight_response
from dependencies import get_consultation_client, get_storage
from infrastructure.storage import S3StorageAdapter, StorageError
from observability.metrics import recordings_received_total

from .errors import DownstreamError, IntakeValidationError
from .schemas import ProcessEmailResponse
from .service import EmailIntakeService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Intake"])


@router.options("/process-email", include_in_schema=False)
async def process_email_preflight():
    return preflight_response()


@router.post("/process-email", response_model=ProcessEmailResponse)
async def process_email(
    storage: Annotated[S3StorageAdapter, Depends(get_storage)],
    client: Annotated[httpx.AsyncClient, Depends(get_consultation_client)],
    settings: Annotated[Settings, Depends(get_settings)],
    sender: Annotated[Optional[str], Form()] = None,
    attachment: Annotated[Optional[UploadFile], File(alias="attachment-1")] = None,
):
    """Receive a recording delivered by email.

    Validation:
    - sender must be present and non-empty
    - attachment-1 must be present with media type audio/mpeg
    - attachment must not exceed MAX_ATTACHMENT_BYTES (50 MiB)

    Processing:
    1. Upload the bytes to recordings/<filename> (overwrite allowed)
    2. Derive the public URL of the stored object
    3. Forward {email, audioUrl} to the consultation-creation endpoint

    Returns:
        200 {"message", "success"} or 400 {"error"}

    Example:
        curl -X POST http://localhost:8000/api/v1/process-email \\
             -F "sender=rep@example.com" \\
             -F "attachment-1=@call.mp3;type=audio/mpeg"
    """
    service = EmailIntakeService(
        storage=storage,
        client=client,
        max_attachment_bytes=settings.MAX_ATTACHMENT_BYTES,
    )

    try:
        result = await service.process(sender, attachment)
    except IntakeValidationError as e:
        logger.warning(f"Rejected webhook delivery: {e.message}", extra={"sender": sender})
        recordings_received_total.labels(status="rejected").inc()
        return cors_error(e.message)
    except StorageError as e:
        logger.error(f"Recording upload failed: {e}", extra={"sender": sender})
        recordings_received_total.labels(status="storage_error").inc()
        return cors_error(str(e))
    except DownstreamError as e:
        recordings_received_total.labels(status="downstream_error").inc()
        return cors_error(e.message)

    recordings_received_total.labels(status="accepted").inc()
    logger.info(
        f"Email processed: audio_url={result.audio_url}",
        extra={"sender": result.sender, "storage_key": result.storage_key},
    )

    return cors_json(
        ProcessEmailResponse(message="Email processed successfully", success=True).model_dump()
    )
