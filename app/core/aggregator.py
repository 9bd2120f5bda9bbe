# app/core/aggregator.py

"""
Dashboard aggregator.

역할:
- MemStorage 의 현재 상태로부터 DashboardStats / RealtimeData 를 계산한다.
- 자체 상태나 캐시는 두지 않는다. 호출할 때마다 다시 계산하므로
  항상 저장소와 일치하는 값을 돌려준다.

규칙 (비즈니스 룰로 그대로 사용):
- active critical alert 가 하나라도 있으면 Critical, 아니면 warning 이 있으면 Warning, 그 외 Healthy
- successRate = success / (전체 - in_progress) * 100, 분모가 0이면 0, 소수 첫째 자리 반올림
- uptime 은 고정값
"""

from __future__ import annotations

import asyncio
from typing import List

from app.core.storage import MemStorage
from app.models.alerts import Alert
from app.models.dashboard import DashboardStats, RealtimeData
from app.models.deployments import Deployment
from app.models.metrics import SystemMetrics

UPTIME_PLACEHOLDER = 99.9
RECENT_DEPLOYMENTS = 10


def compute_success_rate(deployments: List[Deployment]) -> float:
    successful = sum(1 for d in deployments if d.status == "success")
    completed = sum(1 for d in deployments if d.status != "in_progress")
    if completed == 0:
        return 0.0
    return round(successful / completed * 100, 1)


def derive_system_status(active_alerts: List[Alert]) -> str:
    severities = {a.severity for a in active_alerts}
    if "critical" in severities:
        return "Critical"
    if "warning" in severities:
        return "Warning"
    return "Healthy"


class DashboardAggregator:
    def __init__(self, storage: MemStorage) -> None:
        self.storage = storage

    def _placeholder_metrics(self) -> SystemMetrics:
        # 샘플이 하나도 없을 때 소비자에게 None 대신 내려주는 0 값
        return SystemMetrics(
            id=0,
            timestamp=self.storage.now(),
            cpu_usage=0.0,
            memory_usage=0.0,
            disk_usage=0.0,
            network_io=0.0,
        )

    async def get_dashboard_stats(self) -> DashboardStats:
        active_alerts, deployments = await asyncio.gather(
            self.storage.get_active_alerts(),
            self.storage.get_deployments(limit=None),
        )
        return DashboardStats(
            system_status=derive_system_status(active_alerts),
            uptime=UPTIME_PLACEHOLDER,
            active_deployments=sum(1 for d in deployments if d.status == "in_progress"),
            success_rate=compute_success_rate(deployments),
            active_alerts=len(active_alerts),
            critical_alerts=sum(1 for a in active_alerts if a.severity == "critical"),
            warning_alerts=sum(1 for a in active_alerts if a.severity == "warning"),
        )

    async def get_latest_metrics(self) -> SystemMetrics:
        latest = await self.storage.get_latest_metrics()
        return latest if latest is not None else self._placeholder_metrics()

    async def get_realtime_data(self) -> RealtimeData:
        """stats / metrics / deployments / alerts 를 독립적으로 조회해 스냅샷 하나로 묶는다."""
        stats, metrics, recent_deployments, active_alerts = await asyncio.gather(
            self.get_dashboard_stats(),
            self.get_latest_metrics(),
            self.storage.get_deployments(limit=RECENT_DEPLOYMENTS),
            self.storage.get_active_alerts(),
        )
        return RealtimeData(
            stats=stats,
            metrics=metrics,
            recent_deployments=recent_deployments,
            active_alerts=active_alerts,
        )
