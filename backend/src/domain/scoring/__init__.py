"""Scoring domain module - pluggable scorers and their reports"""

from .models import ScoreResult, ScoringInput, ScoringReport, ScoringStatus
from .ports import ScoringError, ScoringPort
from .placeholder import PLACEHOLDER_SCORE, PlaceholderScorer

__all__ = [
    "ScoreResult",
    "ScoringInput",
    "ScoringReport",
    "ScoringStatus",
    "ScoringError",
    "ScoringPort",
    "PLACEHOLDER_SCORE",
    "PlaceholderScorer",
]
