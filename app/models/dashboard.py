from __future__ import annotations

from typing import List, Literal

from app.models.alerts import Alert
from app.models.common import CamelModel, SystemStatus
from app.models.deployments import Deployment
from app.models.metrics import SystemMetrics


class DashboardStats(CamelModel):
    system_status: SystemStatus
    uptime: float
    active_deployments: int
    success_rate: float
    active_alerts: int
    critical_alerts: int
    warning_alerts: int


class RealtimeData(CamelModel):
    """한 시점에 계산된 대시보드 스냅샷."""

    stats: DashboardStats
    metrics: SystemMetrics
    recent_deployments: List[Deployment]
    active_alerts: List[Alert]


class DashboardUpdate(CamelModel):
    """/ws 로 내려보내는 메시지 envelope."""

    type: Literal["dashboard_update"] = "dashboard_update"
    data: RealtimeData
