"""Consultation API endpoints

POST /process-consultation is called by the intake webhook once a recording
is stored. GET /consultations is the read model behind the dashboard.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cors import cors_error, cors_json, preflight_response
from database import get_db
from dependencies import get_baseline_scorer, get_scorers
from domain.scoring import ScoringError, ScoringPort

from .schemas import (
    ConsultationResponse,
    ProcessConsultationRequest,
    ProcessConsultationResponse,
    ScoringReportResponse,
)
from .service import ConsultationService, list_consultations

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Consultations"])


@router.options("/process-consultation", include_in_schema=False)
async def process_consultation_preflight():
    return preflight_response()


@router.post("/process-consultation", response_model=ProcessConsultationResponse)
def process_consultation(
    body: ProcessConsultationRequest,
    db: Annotated[Session, Depends(get_db)],
    baseline_scorer: Annotated[ScoringPort, Depends(get_baseline_scorer)],
    scorers: Annotated[List[ScoringPort], Depends(get_scorers)],
):
    """Create a consultation for a stored recording.

    1. Find-or-create the consultant by email (name = part before '@')
    2. Insert the consultation (email_source = email, transcript = NULL)
    3. Insert the placeholder "Overall" score

    Steps 1-3 commit together or not at all. Database errors are returned
    as 400 {"error": <driver message>}.
    """
    service = ConsultationService(db, baseline_scorer=baseline_scorer, scorers=scorers)

    try:
        processed = service.process(body.email, body.audio_url)
    except SQLAlchemyError as e:
        message = str(e.orig) if getattr(e, "orig", None) is not None else str(e)
        logger.error(f"Consultation write failed: {message}", exc_info=True)
        return cors_error(message)
    except (ScoringError, ValueError) as e:
        logger.error(f"Consultation rejected: {e}")
        return cors_error(str(e))

    response = ProcessConsultationResponse(
        message="Consultation processed successfully",
        consultation_id=processed.consultation_id,
        consultant_id=processed.consultant_id,
        scoring=[
            ScoringReportResponse(
                scorer=report.scorer,
                status=report.status.value,
                scores_written=report.scores_written,
                error=report.error,
            )
            for report in processed.scoring
        ],
    )
    return cors_json(response.model_dump(mode="json", by_alias=True))


@router.get("/consultations", response_model=List[ConsultationResponse])
def get_consultations(db: Annotated[Session, Depends(get_db)]):
    """All consultations, newest first, with consultant and scores nested."""
    return list_consultations(db)
