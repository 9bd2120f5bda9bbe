from __future__ import annotations

from typing import Optional

from app.models.common import CamelModel, DeploymentStatus, UtcDatetime


class DeploymentCreate(CamelModel):
    """Payload for inserting a deployment record."""

    service: str
    version: str
    status: DeploymentStatus
    timestamp: UtcDatetime
    duration: Optional[int] = None  # 초 단위, in_progress 동안은 None


class Deployment(DeploymentCreate):
    id: int
