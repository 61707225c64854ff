"""Consultation API request/response schemas"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProcessConsultationRequest(BaseModel):
    """Body of POST /process-consultation"""
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=1, description="Consultant email (exact match key)")
    audio_url: str = Field(..., alias="audioUrl", min_length=1, description="Public URL of the recording")

    @field_validator("email", "audio_url")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ScoringReportResponse(BaseModel):
    scorer: str
    status: str
    scores_written: int = Field(..., serialization_alias="scoresWritten")
    error: Optional[str] = None


class ProcessConsultationResponse(BaseModel):
    message: str
    consultation_id: UUID = Field(..., serialization_alias="consultationId")
    consultant_id: UUID = Field(..., serialization_alias="consultantId")
    scoring: List[ScoringReportResponse] = Field(default_factory=list)


class ConsultantSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class ScoreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    score: int
    notes: Optional[str] = None


class ConsultationResponse(BaseModel):
    """One consultation with nested consultant and scores"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    audio_url: str
    transcript: Optional[str] = None
    email_source: str
    created_at: datetime
    consultant: ConsultantSummary
    scores: List[ScoreResponse]
