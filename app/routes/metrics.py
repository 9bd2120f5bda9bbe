import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.aggregator import DashboardAggregator
from app.core.params import safe_int
from app.core.storage import MemStorage
from app.models.metrics import SystemMetrics
from app.routes.deps import get_aggregator, get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=SystemMetrics)
async def get_latest_metrics(aggregator: DashboardAggregator = Depends(get_aggregator)) -> SystemMetrics:
    """샘플이 없으면 id=0 인 0값 placeholder."""
    try:
        return await aggregator.get_latest_metrics()
    except Exception:
        logger.exception("Failed to fetch metrics")
        raise HTTPException(status_code=500, detail="Failed to fetch metrics")


@router.get("/history", response_model=List[SystemMetrics])
async def get_metrics_history(
    hours: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
) -> List[SystemMetrics]:
    try:
        return await storage.get_metrics_history(safe_int(hours, 24))
    except Exception:
        logger.exception("Failed to fetch metrics history")
        raise HTTPException(status_code=500, detail="Failed to fetch metrics history")
