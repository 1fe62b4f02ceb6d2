"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.models import Product
from app.schemas.common import HealthResponse


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return "unhealthy"

    def count_products(self) -> int:
        """Number of products in the catalog, 0 if the table is unreachable."""
        try:
            return self._db.query(Product).count()
        except SQLAlchemyError:
            self._db.rollback()
            return 0

    def get_health(self) -> HealthResponse:
        """Get full health status."""
        db_status = self.check_database()
        products = self.count_products() if db_status == "healthy" else 0

        overall = "healthy" if db_status == "healthy" else "degraded"

        return HealthResponse(
            status=overall,
            components={
                "api": "healthy",
                "database": db_status
            },
            details={
                "products": products
            }
        )


@router.get("", response_model=HealthResponse)
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns API and database status with the catalog size.
    """
    controller = HealthController(db)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness probe for container orchestration."""
    controller = HealthController(db)
    return {"ready": controller.check_database() == "healthy"}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
