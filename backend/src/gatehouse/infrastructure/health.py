"""Dependency health probes."""
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    UNHEALTHY = "Unhealthy"


@dataclass(frozen=True)
class HealthCheckResult:
    status: HealthStatus
    description: str

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY


class DatabaseHealthCheck:
    name = "database"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def check(self) -> HealthCheckResult:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database health check failed")
            return HealthCheckResult(HealthStatus.UNHEALTHY, "Database health check failed.")
        return HealthCheckResult(HealthStatus.HEALTHY, "Database is available.")
