"""Integration tests for the consultation listing and dashboard pages"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from database import get_db
from models import Consultant, Consultation, Score

T1 = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
T2 = datetime(2026, 10, 2, 14, 30, tzinfo=timezone.utc)
T3 = datetime(2026, 10, 3, 17, 45, tzinfo=timezone.utc)


@pytest.fixture
def consultations(db_session):
    """Three consultations for one consultant, inserted oldest first"""
    consultant = Consultant(name="jane", email="jane@example.com")
    db_session.add(consultant)
    db_session.flush()

    rows = []
    for created_at, transcript in ((T1, None), (T2, "Hello, thanks for calling."), (T3, None)):
        consultation = Consultation(
            consultant_id=consultant.id,
            audio_url=f"https://example.com/recordings/{created_at:%d}.mp3",
            email_source=consultant.email,
            transcript=transcript,
            created_at=created_at,
        )
        db_session.add(consultation)
        db_session.flush()
        db_session.add(Score(
            consultation_id=consultation.id,
            category="Overall",
            score=75,
            notes="Placeholder score",
        ))
        rows.append(consultation)

    db_session.commit()
    return [str(row.id) for row in rows]


def broken_db():
    session = MagicMock(spec=Session)
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("database is down"))
    yield session


class TestConsultationsApi:

    def test_newest_first(self, client, consultations):
        response = client.get("/api/v1/consultations")

        assert response.status_code == 200
        ids = [item["id"] for item in response.json()]
        assert ids == list(reversed(consultations))

    def test_nested_consultant_and_scores(self, client, consultations):
        newest = client.get("/api/v1/consultations").json()[0]

        assert newest["consultant"] == {"name": "jane", "email": "jane@example.com"}
        assert newest["scores"] == [
            {"category": "Overall", "score": 75, "notes": "Placeholder score"}
        ]
        assert newest["transcript"] is None
        assert newest["email_source"] == "jane@example.com"

    def test_empty(self, client):
        response = client.get("/api/v1/consultations")

        assert response.status_code == 200
        assert response.json() == []


class TestDashboardPages:

    def test_shell_has_loading_indicator(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Sales Consultation Analyzer" in response.text
        assert 'class="spinner"' in response.text
        assert "/dashboard/consultations" in response.text

    def test_cards_newest_first(self, client, consultations):
        html = client.get("/dashboard/consultations").text

        positions = [html.index(f'data-consultation-id="{cid}"') for cid in consultations]
        # T3 card appears before T2 before T1
        assert positions[2] < positions[1] < positions[0]

    def test_card_contents(self, client, consultations):
        html = client.get("/dashboard/consultations").text

        assert html.count('class="consultation-card"') == 3
        assert "jane" in html
        assert "(jane@example.com)" in html
        assert "Oct 3, 2026, 5:45 PM" in html
        assert 'href="https://example.com/recordings/03.mp3"' in html
        assert "Listen to Recording" in html
        assert html.count("75%") == 3
        assert "Placeholder score" in html

    def test_transcript_only_when_present(self, client, consultations):
        html = client.get("/dashboard/consultations").text

        assert html.count('class="transcript"') == 1
        assert "Hello, thanks for calling." in html

    def test_empty_list(self, client):
        response = client.get("/dashboard/consultations")

        assert response.status_code == 200
        assert 'class="consultation-card"' not in response.text

    def test_read_failure_renders_empty_list(self, client):
        from main import app
        app.dependency_overrides[get_db] = broken_db

        response = client.get("/dashboard/consultations")

        assert response.status_code == 200
        assert 'class="cards"' in response.text
        assert 'class="consultation-card"' not in response.text
