import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.params import optional_filter, safe_int
from app.core.storage import MemStorage
from app.models.metrics import PerformanceMetrics
from app.routes.deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[PerformanceMetrics])
async def list_performance_metrics(
    service: Optional[str] = None,
    hours: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
) -> List[PerformanceMetrics]:
    try:
        return await storage.get_performance_metrics(optional_filter(service), safe_int(hours, 24))
    except Exception:
        logger.exception("Failed to fetch performance metrics")
        raise HTTPException(status_code=500, detail="Failed to fetch performance metrics")
