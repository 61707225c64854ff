"""Health check utilities.

Provides health and readiness checks for the relational backend and the
recording store.
"""

import logging
import time
from enum import Enum
from typing import Dict, Optional
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.orm import Session

from infrastructure.storage import S3StorageAdapter

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_database_health(db: Session) -> ComponentHealth:
    """Check database connectivity with a trivial query."""
    try:
        start = time.time()
        db.execute(text("SELECT 1"))
        latency_ms = (time.time() - start) * 1000

        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Database connection OK",
            latency_ms=round(latency_ms, 2)
        )
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Database error: {str(e)}"
        )


async def check_object_storage_health(storage: S3StorageAdapter) -> ComponentHealth:
    """Check that the recordings bucket is reachable."""
    try:
        start = time.time()
        await storage.verify_bucket_exists()
        latency_ms = (time.time() - start) * 1000

        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Object storage connection OK",
            latency_ms=round(latency_ms, 2)
        )
    except Exception as e:
        logger.error(f"Object storage health check failed: {e}", exc_info=True)
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Object storage error: {str(e)}"
        )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Healthy only when every component is; a single failure fails the whole."""
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY
    return HealthStatus.UNHEALTHY
