import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.params import safe_int
from app.core.storage import MemStorage
from app.models.pipelines import PipelineRun
from app.routes.deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[PipelineRun])
async def list_pipeline_runs(
    limit: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
) -> List[PipelineRun]:
    try:
        return await storage.get_pipeline_runs(safe_int(limit, 20))
    except Exception:
        logger.exception("Failed to fetch pipeline runs")
        raise HTTPException(status_code=500, detail="Failed to fetch pipeline runs")
