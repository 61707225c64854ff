"""Email intake request/response schemas"""

from pydantic import BaseModel, ConfigDict, Field


class ProcessEmailResponse(BaseModel):
    """Response for a successfully processed webhook delivery"""
    message: str = Field(..., description="Human-readable outcome")
    success: bool = Field(..., description="Always true on 200 responses")


class ForwardedConsultation(BaseModel):
    """Body forwarded to the consultation-creation endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    audio_url: str = Field(..., serialization_alias="audioUrl")
