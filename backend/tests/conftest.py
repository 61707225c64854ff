"""Pytest fixtures for the consultation backend.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database (tables recreated per test)
- Mocked S3 bucket (moto) and a storage adapter bound to it
- A TestClient whose forwarded consultation call is routed back into the app

Usage:
    def test_dashboard(client, db_session):
        response = client.get("/dashboard/consultations")
        assert response.status_code == 200
"""

import sys
import os
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("S3_ACCESS_KEY_ID", "test-access-key")
os.environ.setdefault("S3_SECRET_ACCESS_KEY", "test-secret-key")
os.environ.setdefault("S3_BUCKET_NAME", "consultations")
os.environ.setdefault("S3_REGION", "us-east-1")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

import boto3
import httpx
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from models import Base
from database import get_db as database_get_db
from dependencies import get_consultation_client, get_storage
from infrastructure.storage import S3StorageAdapter


TEST_BUCKET = "consultations"
TEST_REGION = "us-east-1"
TEST_ACCESS_KEY = "test-access-key"
TEST_SECRET_KEY = "test-secret-key"

# One shared in-memory database: StaticPool hands every checkout the same
# connection, so the app's threadpool and the test see the same rows
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    Each test gets a clean database state.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def s3_client():
    """Mock S3 environment with the recordings bucket created"""
    with mock_aws():
        client = boto3.client(
            "s3",
            region_name=TEST_REGION,
            aws_access_key_id=TEST_ACCESS_KEY,
            aws_secret_access_key=TEST_SECRET_KEY,
        )
        client.create_bucket(Bucket=TEST_BUCKET)

        yield client


@pytest.fixture
def storage(s3_client) -> S3StorageAdapter:
    """S3StorageAdapter bound to the mocked bucket"""
    return S3StorageAdapter(
        endpoint_url=None,  # AWS S3 (moto mocks this)
        access_key=TEST_ACCESS_KEY,
        secret_key=TEST_SECRET_KEY,
        bucket_name=TEST_BUCKET,
        region=TEST_REGION,
    )


@pytest.fixture(scope="function")
def client(db_session: Session, storage: S3StorageAdapter):
    """Create a test client wired to the test database and mocked bucket.

    The intake webhook's forwarded call to /api/v1/process-consultation is
    served by the same app through httpx's ASGI transport, so one POST to
    /api/v1/process-email exercises the whole pipeline.
    """
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    async def override_get_consultation_client():
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        ) as forward_client:
            yield forward_client

    app.dependency_overrides[database_get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_consultation_client] = override_get_consultation_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
