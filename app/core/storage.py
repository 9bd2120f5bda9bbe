"""
In-memory repository for every dashboard record.

역할:
- deployments / alerts / system metrics / pipeline runs / system logs /
  performance metrics 를 엔티티별 dict 에 보관한다.
- id 는 엔티티별로 1부터 순차 발급되고 재사용하지 않는다.
- 조회 결과는 항상 복사본이라 호출자가 수정해도 저장된 레코드에는 영향이 없다.

메서드는 전부 async 로 노출하지만 내부에서 await 하지 않는다. 이벤트 루프
하나에서 돌기 때문에 생성/수정은 중간에 끊기지 않고 한 번에 반영된다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Callable, Dict, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

from app.models.alerts import Alert, AlertCreate
from app.models.deployments import Deployment, DeploymentCreate
from app.models.logs import SystemLog, SystemLogCreate
from app.models.metrics import (
    PerformanceMetrics,
    PerformanceMetricsCreate,
    SystemMetrics,
    SystemMetricsCreate,
)
from app.models.pipelines import PipelineRun, PipelineRunCreate, PipelineRunUpdate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
RecordT = TypeVar("RecordT", bound=BaseModel)

# 알 수 없는 severity 는 0 으로 맨 뒤
SEVERITY_RANK: Dict[str, int] = {"critical": 3, "warning": 2, "info": 1}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _clone(record: RecordT) -> RecordT:
    return record.model_copy(deep=True)


class MemStorage:
    def __init__(self, *, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or _now
        self._deployments: Dict[int, Deployment] = {}
        self._alerts: Dict[int, Alert] = {}
        self._metrics: Dict[int, SystemMetrics] = {}
        self._pipeline_runs: Dict[int, PipelineRun] = {}
        self._system_logs: Dict[int, SystemLog] = {}
        self._performance_metrics: Dict[int, PerformanceMetrics] = {}
        self._ids: Dict[str, Iterator[int]] = {
            "deployments": count(1),
            "alerts": count(1),
            "metrics": count(1),
            "pipeline_runs": count(1),
            "system_logs": count(1),
            "performance_metrics": count(1),
        }

    def now(self) -> datetime:
        return self._clock()

    def is_empty(self) -> bool:
        return not any((
            self._deployments,
            self._alerts,
            self._metrics,
            self._pipeline_runs,
            self._system_logs,
            self._performance_metrics,
        ))

    def _cutoff(self, hours: float) -> datetime:
        try:
            return self._clock() - timedelta(hours=hours)
        except OverflowError:
            # datetime 범위를 넘는 창은 전체 기간으로 본다
            edge = datetime.min if hours >= 0 else datetime.max
            return edge.replace(tzinfo=timezone.utc)

    # ---- deployments ----

    async def create_deployment(self, payload: DeploymentCreate) -> Deployment:
        record = Deployment(id=next(self._ids["deployments"]), **payload.model_dump())
        self._deployments[record.id] = record
        return _clone(record)

    async def get_deployments(self, limit: Optional[int] = 10) -> List[Deployment]:
        """timestamp 내림차순, 같은 시각이면 나중에 들어온 것이 먼저. limit=None 이면 전체."""
        records = sorted(
            self._deployments.values(),
            key=lambda d: (d.timestamp, d.id),
            reverse=True,
        )
        if limit is not None:
            records = records[:limit]
        return [_clone(d) for d in records]

    # ---- alerts ----

    async def create_alert(self, payload: AlertCreate) -> Alert:
        record = Alert(id=next(self._ids["alerts"]), **payload.model_dump())
        self._alerts[record.id] = record
        return _clone(record)

    async def get_alert(self, alert_id: int) -> Optional[Alert]:
        record = self._alerts.get(alert_id)
        return _clone(record) if record else None

    async def get_active_alerts(self) -> List[Alert]:
        """
        active 상태만, severity(critical > warning > info) 우선 정렬 후
        같은 severity 안에서는 최신순.
        """
        active = [a for a in self._alerts.values() if a.status == "active"]
        active.sort(
            key=lambda a: (SEVERITY_RANK.get(a.severity, 0), a.timestamp, a.id),
            reverse=True,
        )
        return [_clone(a) for a in active]

    async def resolve_alert(self, alert_id: int) -> None:
        # 없는 id 는 조용히 무시
        record = self._alerts.get(alert_id)
        if record is None:
            logger.debug("resolve_alert: unknown alert id %s", alert_id)
            return
        record.status = "resolved"

    # ---- system metrics ----

    async def create_metrics(self, payload: SystemMetricsCreate) -> SystemMetrics:
        record = SystemMetrics(id=next(self._ids["metrics"]), **payload.model_dump())
        self._metrics[record.id] = record
        return _clone(record)

    async def get_latest_metrics(self) -> Optional[SystemMetrics]:
        if not self._metrics:
            return None
        latest = max(self._metrics.values(), key=lambda m: (m.timestamp, m.id))
        return _clone(latest)

    async def get_metrics_history(self, hours: float) -> List[SystemMetrics]:
        """now - hours 이후(경계 포함) 샘플을 오래된 순으로."""
        cutoff = self._cutoff(hours)
        records = [m for m in self._metrics.values() if m.timestamp >= cutoff]
        records.sort(key=lambda m: (m.timestamp, m.id))
        return [_clone(m) for m in records]

    # ---- pipeline runs ----

    async def create_pipeline_run(self, payload: PipelineRunCreate) -> PipelineRun:
        record = PipelineRun(id=next(self._ids["pipeline_runs"]), **payload.model_dump())
        self._pipeline_runs[record.id] = record
        return _clone(record)

    async def get_pipeline_run(self, run_id: int) -> Optional[PipelineRun]:
        record = self._pipeline_runs.get(run_id)
        return _clone(record) if record else None

    async def get_pipeline_runs(self, limit: int = 20) -> List[PipelineRun]:
        records = sorted(
            self._pipeline_runs.values(),
            key=lambda r: (r.start_time, r.id),
            reverse=True,
        )
        return [_clone(r) for r in records[:limit]]

    async def update_pipeline_run(self, run_id: int, updates: PipelineRunUpdate) -> None:
        """명시적으로 set 된 필드만 병합. 없는 id 는 무시."""
        record = self._pipeline_runs.get(run_id)
        if record is None:
            logger.debug("update_pipeline_run: unknown run id %s", run_id)
            return
        merged = {**record.model_dump(), **updates.model_dump(exclude_unset=True)}
        # 레코드 교체는 한 번의 대입으로 끝난다
        self._pipeline_runs[run_id] = PipelineRun(**merged)

    # ---- system logs ----

    async def create_system_log(self, payload: SystemLogCreate) -> SystemLog:
        record = SystemLog(id=next(self._ids["system_logs"]), **payload.model_dump())
        self._system_logs[record.id] = record
        return _clone(record)

    async def get_system_logs(self, limit: int = 50, level: Optional[str] = None) -> List[SystemLog]:
        records = list(self._system_logs.values())
        if level:
            records = [log for log in records if log.level == level]
        records.sort(key=lambda log: (log.timestamp, log.id), reverse=True)
        return [_clone(log) for log in records[:limit]]

    # ---- performance metrics ----

    async def create_performance_metrics(self, payload: PerformanceMetricsCreate) -> PerformanceMetrics:
        record = PerformanceMetrics(
            id=next(self._ids["performance_metrics"]),
            **payload.model_dump(),
        )
        self._performance_metrics[record.id] = record
        return _clone(record)

    async def get_performance_metrics(
        self,
        service: Optional[str] = None,
        hours: float = 24,
    ) -> List[PerformanceMetrics]:
        cutoff = self._cutoff(hours)
        records = [m for m in self._performance_metrics.values() if m.timestamp >= cutoff]
        if service:
            records = [m for m in records if m.service == service]
        records.sort(key=lambda m: (m.timestamp, m.id))
        return [_clone(m) for m in records]
