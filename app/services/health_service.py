"""Health check service for monitoring system components."""
import logging
from typing import Dict, Any
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthCheckService:
    """Service for checking health of system components."""

    def check_database(self, session: Session) -> Dict[str, Any]:
        """Check database connectivity and health.

        Returns:
            Dictionary with status and details
        """
        try:
            session.execute(text("SELECT 1"))
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Database connection successful",
                "details": {"dialect": session.get_bind().dialect.name},
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": f"Database connection failed: {str(e)}",
                "details": {"error": str(e)},
            }

    def get_overall_health(self, session: Session) -> Dict[str, Any]:
        """Get overall system health status.

        Returns:
            Dictionary with overall status and component details
        """
        database = self.check_database(session)
        return {
            "status": database["status"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": {"database": database},
        }


# Global instance
health_service = HealthCheckService()
