"""Scoring Port - interface for pluggable consultation scorers.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import List

from .models import ScoreResult, ScoringInput


class ScoringError(Exception):
    """Raised by a scorer that cannot produce scores for a consultation."""
    pass


class ScoringPort(ABC):
    """Port interface for consultation scorers.

    Implementations receive a ScoringInput snapshot and return zero or more
    ScoreResult values. They must not write to the database; persistence is
    handled by the caller.
    """

    name: str = "scorer"

    @abstractmethod
    def score(self, consultation: ScoringInput) -> List[ScoreResult]:
        """Produce scores for a consultation.

        Raises:
            ScoringError: If the scorer cannot score this consultation
        """
        pass
