import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.aggregator import DashboardAggregator
from app.models.dashboard import DashboardStats, RealtimeData
from app.routes.deps import get_aggregator

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=RealtimeData)
async def get_dashboard(aggregator: DashboardAggregator = Depends(get_aggregator)) -> RealtimeData:
    """/ws 로 푸시되는 것과 같은 스냅샷을 폴링용으로 제공."""
    try:
        return await aggregator.get_realtime_data()
    except Exception:
        logger.exception("Failed to fetch dashboard data")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard data")


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(aggregator: DashboardAggregator = Depends(get_aggregator)) -> DashboardStats:
    try:
        return await aggregator.get_dashboard_stats()
    except Exception:
        logger.exception("Failed to fetch dashboard stats")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")
