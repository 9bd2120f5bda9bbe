import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.params import optional_filter, safe_int
from app.core.storage import MemStorage
from app.models.logs import SystemLog
from app.routes.deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[SystemLog])
async def list_system_logs(
    limit: Optional[str] = None,
    level: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
) -> List[SystemLog]:
    try:
        return await storage.get_system_logs(safe_int(limit, 50), optional_filter(level))
    except Exception:
        logger.exception("Failed to fetch system logs")
        raise HTTPException(status_code=500, detail="Failed to fetch system logs")
