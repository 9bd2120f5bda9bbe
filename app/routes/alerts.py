import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.core.storage import MemStorage
from app.models.alerts import Alert
from app.routes.deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Alert])
async def list_active_alerts(storage: MemStorage = Depends(get_storage)) -> List[Alert]:
    try:
        return await storage.get_active_alerts()
    except Exception:
        logger.exception("Failed to fetch alerts")
        raise HTTPException(status_code=500, detail="Failed to fetch alerts")


@router.get("/{alert_id}", response_model=Alert)
async def get_alert(alert_id: int, storage: MemStorage = Depends(get_storage)) -> Alert:
    """resolved 된 알림도 id 로는 조회된다."""
    record = await storage.get_alert(alert_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Alert not found")
    return record


@router.post(
    "/{alert_id}/resolve",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def resolve_alert(alert_id: int, storage: MemStorage = Depends(get_storage)) -> Response:
    # 없는 id 도 에러 없이 204
    await storage.resolve_alert(alert_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
