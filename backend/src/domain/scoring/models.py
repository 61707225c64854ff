"""Scoring domain models

Plain dataclasses so scorers never touch ORM sessions directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class ScoringInput:
    """Snapshot of a consultation handed to a scorer.

    transcript is None until a transcription step exists; scorers that need
    text must handle that themselves.
    """
    consultation_id: UUID
    audio_url: str
    email_source: str
    transcript: Optional[str] = None


@dataclass(frozen=True)
class ScoreResult:
    """One named metric produced by a scorer (0-100)."""
    category: str
    score: int
    notes: str = ""

    def __post_init__(self):
        if not self.category:
            raise ValueError("Score category cannot be empty")
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score must be between 0 and 100 (got {self.score})")


class ScoringStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ScoringReport:
    """Outcome of one scorer run, reported independently of consultation creation."""
    scorer: str
    status: ScoringStatus
    scores_written: int = 0
    error: Optional[str] = None
