from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.dependencies import get_app_config, get_rate_store
from fxrates.health import get_health_status


router = APIRouter()


@router.get("/health")
async def health(store=Depends(get_rate_store), config=Depends(get_app_config)):
    status = await get_health_status(store, config)
    # health structure is already a dict with status, components
    return status
