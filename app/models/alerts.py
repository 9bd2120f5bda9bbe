from __future__ import annotations

from typing import Optional

from app.models.common import AlertSeverity, AlertStatus, CamelModel, UtcDatetime


class AlertCreate(CamelModel):
    """Payload for inserting an alert."""

    title: str
    description: str
    severity: AlertSeverity
    status: AlertStatus = "active"
    timestamp: UtcDatetime
    service: Optional[str] = None


class Alert(AlertCreate):
    id: int
