from fastapi import APIRouter, Depends

from app.api.deps import get_storage
from app.schemas.stats import StatsResponse
from app.storage import Storage

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=StatsResponse)
async def marketplace_stats(storage: Storage = Depends(get_storage)):
    """Landing page counters."""
    return await storage.get_event_stats()
