"""Placeholder scorer

Stands in for real call analysis: every consultation gets one fixed
"Overall" score of 75.
"""

from typing import List

from .models import ScoreResult, ScoringInput
from .ports import ScoringPort

PLACEHOLDER_SCORE = ScoreResult(
    category="Overall",
    score=75,
    notes="Placeholder score",
)


class PlaceholderScorer(ScoringPort):
    name = "placeholder"

    def score(self, consultation: ScoringInput) -> List[ScoreResult]:
        return [PLACEHOLDER_SCORE]
