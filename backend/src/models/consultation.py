"""Consultation SQLAlchemy model

One row per processed audio submission. Rows are immutable once written.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Consultation(Base):
    """Consultation model representing one recorded sales call.

    The transcript column is reserved for a transcription step and is always
    NULL in the current workflow.
    """
    __tablename__ = "consultations"
    __table_args__ = (
        Index("ix_consultations_created_at", "created_at"),
        Index("ix_consultations_consultant_id", "consultant_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    consultant_id = Column(Uuid, ForeignKey("consultants.id", ondelete="RESTRICT"), nullable=False)
    audio_url = Column(Text, nullable=False)
    transcript = Column(Text, nullable=True)
    email_source = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    consultant = relationship("Consultant", back_populates="consultations")
    scores = relationship(
        "Score",
        back_populates="consultation",
        cascade="all, delete-orphan",
        order_by="Score.created_at",
    )
