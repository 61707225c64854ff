"""Consultant SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Text, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Consultant(Base):
    """Sales consultant whose calls are reviewed.

    Identity is the email address (the only unique key in the schema). A
    consultant is created the first time a recording arrives from a new
    address, with the name defaulted to the local part of the email, and is
    not updated afterwards by the intake workflow.
    """
    __tablename__ = "consultants"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    consultations = relationship("Consultation", back_populates="consultant")
