import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.params import safe_int
from app.core.storage import MemStorage
from app.models.deployments import Deployment
from app.routes.deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Deployment])
async def list_deployments(
    limit: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
) -> List[Deployment]:
    try:
        return await storage.get_deployments(safe_int(limit, 10))
    except Exception:
        logger.exception("Failed to fetch deployments")
        raise HTTPException(status_code=500, detail="Failed to fetch deployments")
