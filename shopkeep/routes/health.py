from fastapi import APIRouter
from sqlalchemy import text

from shopkeep.dependencies import DbSession

router = APIRouter(tags=["health"])

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "shopkeep"}

@router.get("/health/db")
async def database_health(db: DbSession):
    """Check database connectivity"""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        return {"status": "unhealthy", "database": "error", "error": str(e)}
