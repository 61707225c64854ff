"""Score SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Score(Base):
    """A named metric attached to a consultation (e.g. "Overall": 75)."""
    __tablename__ = "scores"
    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 100", name="ck_scores_score_range"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    consultation_id = Column(Uuid, ForeignKey("consultations.id", ondelete="CASCADE"), nullable=False)
    category = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    consultation = relationship("Consultation", back_populates="scores")
