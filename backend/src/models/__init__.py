"""SQLAlchemy Models for the consultation analyzer"""

from .base import Base
from .consultant import Consultant
from .consultation import Consultation
from .score import Score

__all__ = [
    "Base",
    "Consultant",
    "Consultation",
    "Score",
]
