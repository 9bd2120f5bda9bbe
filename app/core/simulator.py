"""
MetricsSimulator.

역할:
- 실제 수집기가 붙기 전까지 대시보드가 살아 움직이도록 저장소를 흔든다 (데모용).
- tick 한 번마다:
  1) 최신 system metrics 샘플을 jitter 해서 새 샘플로 추가
  2) DEPLOYMENT_PROBABILITY 확률로 배포 기록 추가
  3) ALERT_PROBABILITY 확률로 active alert 추가

실제 수집 파이프라인으로 바뀌어도 storage / aggregator / broadcaster 쪽 계약은 그대로다.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from app.core.metrics import SYSTEM_METRIC_NAMES, get_metric_meta
from app.core.storage import MemStorage
from app.models.alerts import Alert, AlertCreate
from app.models.deployments import Deployment, DeploymentCreate
from app.models.metrics import SystemMetrics, SystemMetricsCreate

logger = logging.getLogger(__name__)

DEPLOY_SERVICES = ("api-gateway", "user-service", "payment-service", "notification-service", "auth-service")
DEPLOY_STATUSES = ("success", "failed", "in_progress")

ALERT_TITLES = (
    "High CPU Usage",
    "Memory Leak Detected",
    "Disk Space Low",
    "Service Timeout",
    "Database Connection Failed",
)
ALERT_SEVERITIES = ("critical", "warning", "info")
ALERT_SERVICES = ("api-gateway", "user-service", "payment-service", "notification-service")
ALERT_DESCRIPTION = "Automated alert generated by monitoring system"


class MetricsSimulator:
    def __init__(
        self,
        storage: MemStorage,
        *,
        rng: Optional[random.Random] = None,
        deployment_probability: float = 0.10,
        alert_probability: float = 0.05,
    ) -> None:
        self.storage = storage
        self.rng = rng or random.Random()
        self.deployment_probability = deployment_probability
        self.alert_probability = alert_probability

    async def step(self) -> None:
        await self.perturb_metrics()
        if self.rng.random() < self.deployment_probability:
            await self.create_random_deployment()
        if self.rng.random() < self.alert_probability:
            await self.create_random_alert()

    async def perturb_metrics(self) -> Optional[SystemMetrics]:
        """최신 샘플이 없으면 아무것도 만들지 않는다."""
        latest = await self.storage.get_latest_metrics()
        if latest is None:
            return None

        values = {
            name: get_metric_meta(name).nudge(getattr(latest, name), self.rng)
            for name in SYSTEM_METRIC_NAMES
        }
        return await self.storage.create_metrics(
            SystemMetricsCreate(timestamp=self.storage.now(), **values)
        )

    async def create_random_deployment(self) -> Deployment:
        service = self.rng.choice(DEPLOY_SERVICES)
        status = self.rng.choice(DEPLOY_STATUSES)
        version = "v{}.{}.{}".format(
            self.rng.randint(1, 5),
            self.rng.randint(0, 9),
            self.rng.randint(0, 9),
        )
        # 진행 중인 배포는 소요 시간이 아직 없다. 완료된 배포는 [30, 330) 초
        duration = None if status == "in_progress" else self.rng.randrange(30, 330)

        deployment = await self.storage.create_deployment(
            DeploymentCreate(
                service=service,
                version=version,
                status=status,
                timestamp=self.storage.now(),
                duration=duration,
            )
        )
        logger.info("Simulated deployment %s %s (%s)", service, version, status)
        return deployment

    async def create_random_alert(self) -> Alert:
        alert = await self.storage.create_alert(
            AlertCreate(
                title=self.rng.choice(ALERT_TITLES),
                description=ALERT_DESCRIPTION,
                severity=self.rng.choice(ALERT_SEVERITIES),
                status="active",
                timestamp=self.storage.now(),
                service=self.rng.choice(ALERT_SERVICES),
            )
        )
        logger.info("Simulated %s alert: %s", alert.severity, alert.title)
        return alert
