from fastapi import APIRouter
from packages.market_insights.settings import settings
from packages.market_insights.storage.db import peek_db_pool
import asyncio
import time

router = APIRouter()

@router.get("/status")
async def get_system_status():
    """Report snapshot store configuration and pool health."""
    status = {
        "storage_configured": settings.storage_configured,
        "database": {"status": "not_initialized"},
        "timestamp": time.time(),
    }
    
    db = peek_db_pool()
    if db is not None:
        stats = db.get_pool_stats()
        stats["healthy"] = await asyncio.to_thread(db.health_check)
        status["database"] = stats
        
    return status
