"""Consultation creation and listing

process() writes the consultant, the consultation and its baseline score in
one transaction: either all three rows exist afterwards or none do. Extra
scorers run after that commit, each in its own transaction, and report their
outcome without affecting the consultation.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from domain.scoring import (
    PlaceholderScorer,
    ScoreResult,
    ScoringInput,
    ScoringPort,
    ScoringReport,
    ScoringStatus,
)
from models import Consultant, Consultation, Score
from observability.metrics import consultations_created_total, scoring_runs_total

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def default_consultant_name(email: str) -> str:
    """Name given to a consultant on first sight: the local part of the email.

    Example:
        >>> default_consultant_name("jane.doe@example.com")
        'jane.doe'
        >>> default_consultant_name("no-at-sign")
        'no-at-sign'
    """
    return email.split("@")[0]


@dataclass
class ProcessedConsultation:
    consultation_id: UUID
    consultant_id: UUID
    consultant_created: bool
    scores_written: int
    scoring: List[ScoringReport] = field(default_factory=list)


class ConsultationService:
    """Creates consultations from (email, audio URL) pairs.

    Args:
        db: Database session (the caller owns its lifetime)
        baseline_scorer: Scorer written atomically with the consultation
        scorers: Scorers run after commit, reported independently
    """

    def __init__(
        self,
        db: Session,
        baseline_scorer: Optional[ScoringPort] = None,
        scorers: Sequence[ScoringPort] = (),
    ):
        self.db = db
        self.baseline_scorer = baseline_scorer or PlaceholderScorer()
        self.scorers = list(scorers)

    def process(self, email: str, audio_url: str) -> ProcessedConsultation:
        """Find-or-create the consultant, then create the consultation and its score.

        Raises:
            SQLAlchemyError: Any query/insert failure (nothing is left written)
            ScoringError: If the baseline scorer fails (nothing is left written)
        """
        try:
            consultant, created = self.upsert_consultant(email)

            consultation = Consultation(
                consultant_id=consultant.id,
                audio_url=audio_url,
                transcript=None,
                email_source=email,
            )
            self.db.add(consultation)
            self.db.flush()

            scoring_input = self._scoring_input(consultation)
            scores_written = self._add_scores(
                consultation.id, self.baseline_scorer.score(scoring_input)
            )

            consultation_id, consultant_id = consultation.id, consultant.id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        consultations_created_total.labels(consultant="new" if created else "existing").inc()
        logger.info(
            f"Created consultation: consultant_created={created}, scores={scores_written}",
            extra={"consultant_id": consultant_id, "consultation_id": consultation_id},
        )

        return ProcessedConsultation(
            consultation_id=consultation_id,
            consultant_id=consultant_id,
            consultant_created=created,
            scores_written=scores_written,
            scoring=[self._run_scorer(scorer, scoring_input) for scorer in self.scorers],
        )

    def upsert_consultant(self, email: str) -> Tuple[Consultant, bool]:
        """Idempotent find-or-create keyed on the unique email.

        INSERT ... ON CONFLICT (email) DO NOTHING followed by a select, so two
        concurrent first submissions from one address resolve to the same row.
        An existing consultant is never renamed.

        Returns:
            (consultant, created) where created is True if this call inserted it
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise ValueError(f"Unsupported database dialect for consultant upsert: {dialect}")

        stmt = (
            insert(Consultant)
            .values(email=email, name=default_consultant_name(email))
            .on_conflict_do_nothing(index_elements=["email"])
        )
        result = self.db.execute(stmt)
        created = result.rowcount == 1

        consultant = self.db.execute(
            select(Consultant).where(Consultant.email == email)
        ).scalar_one()

        return consultant, created

    def _add_scores(self, consultation_id, results: Sequence[ScoreResult]) -> int:
        for result in results:
            self.db.add(Score(
                consultation_id=consultation_id,
                category=result.category,
                score=result.score,
                notes=result.notes,
            ))
        self.db.flush()
        return len(results)

    def _run_scorer(self, scorer: ScoringPort, scoring_input: ScoringInput) -> ScoringReport:
        """Run one post-commit scorer in its own transaction.

        Failures are logged, counted and reported; they never propagate.
        """
        try:
            written = self._add_scores(scoring_input.consultation_id, scorer.score(scoring_input))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Scorer {scorer.name} failed: {e}",
                extra={"scorer": scorer.name, "consultation_id": scoring_input.consultation_id},
                exc_info=True,
            )
            scoring_runs_total.labels(scorer=scorer.name, status=ScoringStatus.FAILED.value).inc()
            return ScoringReport(scorer=scorer.name, status=ScoringStatus.FAILED, error=str(e))

        scoring_runs_total.labels(scorer=scorer.name, status=ScoringStatus.SUCCEEDED.value).inc()
        return ScoringReport(scorer=scorer.name, status=ScoringStatus.SUCCEEDED, scores_written=written)

    @staticmethod
    def _scoring_input(consultation: Consultation) -> ScoringInput:
        return ScoringInput(
            consultation_id=consultation.id,
            audio_url=consultation.audio_url,
            email_source=consultation.email_source,
            transcript=consultation.transcript,
        )


def list_consultations(db: Session) -> List[Consultation]:
    """All consultations with consultant and scores loaded, newest first."""
    stmt = (
        select(Consultation)
        .options(
            selectinload(Consultation.consultant),
            selectinload(Consultation.scores),
        )
        .order_by(Consultation.created_at.desc())
    )
    return list(db.execute(stmt).scalars().all())
