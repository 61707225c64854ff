"""Global FastAPI dependencies for storage, the forwarded call and scoring.

Each dependency builds its collaborator from settings so tests can swap any
of them through app.dependency_overrides.
"""

from functools import lru_cache
from typing import AsyncGenerator, List

import httpx
from fastapi import Depends

from config import Settings, get_settings
from domain.scoring import PlaceholderScorer, ScoringPort
from infrastructure.storage import S3StorageAdapter, StorageError, load_storage_config


@lru_cache()
def get_storage() -> S3StorageAdapter:
    """Dependency for the recording store.

    The adapter (and its boto3 client) is built once from settings and reused.
    Call get_storage.cache_clear() after changing settings.

    Raises:
        StorageError: If the storage configuration is invalid or the client
            cannot be created (mapped to 400 {"error"} by the app)
    """
    try:
        config = load_storage_config(get_settings())
    except ValueError as e:
        raise StorageError(f"Invalid storage configuration: {e}") from e

    return S3StorageAdapter(
        endpoint_url=config.endpoint_url,
        access_key=config.access_key,
        secret_key=config.secret_key,
        bucket_name=config.bucket_name,
        region=config.region,
        public_base_url=config.public_base_url,
    )


async def get_consultation_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for the consultation-creation endpoint.

    Carries the service API key as a bearer token. Closed when the request
    finishes.
    """
    headers = {}
    if settings.SERVICE_API_KEY:
        headers["Authorization"] = f"Bearer {settings.SERVICE_API_KEY}"

    async with httpx.AsyncClient(
        base_url=settings.CONSULTATION_SERVICE_URL,
        headers=headers,
        timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS,
    ) as client:
        yield client


def get_baseline_scorer() -> ScoringPort:
    """Scorer whose output is written in the same transaction as the consultation."""
    return PlaceholderScorer()


def get_scorers() -> List[ScoringPort]:
    """Additional scorers run after the consultation is committed.

    None are configured yet; real call analysis plugs in here.
    """
    return []
