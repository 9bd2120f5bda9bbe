"""
데모용 초기 데이터.

DEMO_SEED=true 일 때 앱 시작 시 한 번 넣는다. 시각은 시드 시점 기준 상대값.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta

from app.core.storage import MemStorage
from app.models.alerts import AlertCreate
from app.models.deployments import DeploymentCreate
from app.models.logs import SystemLogCreate
from app.models.metrics import PerformanceMetricsCreate, SystemMetricsCreate
from app.models.pipelines import PipelineRunCreate

logger = logging.getLogger(__name__)


async def seed_demo_data(storage: MemStorage) -> None:
    now = storage.now()

    def minutes_ago(m: int):
        return now - timedelta(minutes=m)

    await storage.create_deployment(DeploymentCreate(
        service="user-service", version="v2.1.4", status="success",
        timestamp=minutes_ago(2), duration=180,
    ))
    await storage.create_deployment(DeploymentCreate(
        service="api-gateway", version="v1.8.2", status="in_progress",
        timestamp=minutes_ago(5), duration=None,
    ))
    await storage.create_deployment(DeploymentCreate(
        service="notification-service", version="v3.2.1", status="failed",
        timestamp=minutes_ago(8), duration=45,
    ))

    await storage.create_alert(AlertCreate(
        title="High Memory Usage", description="Memory usage above 85% threshold",
        severity="critical", status="active", timestamp=minutes_ago(5), service="api-gateway",
    ))
    await storage.create_alert(AlertCreate(
        title="Slow Response Time", description="API response time over 2s",
        severity="warning", status="active", timestamp=minutes_ago(12), service="user-service",
    ))
    await storage.create_alert(AlertCreate(
        title="Service Down", description="Payment service unavailable",
        severity="critical", status="active", timestamp=minutes_ago(18), service="payment-service",
    ))

    await storage.create_metrics(SystemMetricsCreate(
        timestamp=now, cpu_usage=68.5, memory_usage=45.2, disk_usage=82.1, network_io=124.5,
    ))

    await storage.create_pipeline_run(PipelineRunCreate(
        pipeline_name="main-pipeline", branch="main", commit="abc123def456",
        status="success", start_time=minutes_ago(10), end_time=minutes_ago(5),
        duration=300, stages=["build", "test", "deploy"],
        triggered_by="john.doe@company.com",
    ))
    await storage.create_pipeline_run(PipelineRunCreate(
        pipeline_name="feature-auth", branch="feature/auth-improvements", commit="def456ghi789",
        status="running", start_time=minutes_ago(3),
        stages=["build", "test"],
        triggered_by="jane.smith@company.com",
    ))

    await storage.create_system_log(SystemLogCreate(
        timestamp=minutes_ago(2), level="error", service="api-gateway",
        message="Connection timeout to database",
        metadata=json.dumps({"connectionString": "***", "timeout": 5000}),
    ))
    await storage.create_system_log(SystemLogCreate(
        timestamp=minutes_ago(5), level="warn", service="user-service",
        message="High memory usage detected",
        metadata=json.dumps({"memoryUsage": "85%", "threshold": "80%"}),
    ))

    await storage.create_performance_metrics(PerformanceMetricsCreate(
        timestamp=now, service="api-gateway",
        response_time=145.2, throughput=1250.5, error_rate=2.1,
    ))
    await storage.create_performance_metrics(PerformanceMetricsCreate(
        timestamp=now, service="user-service",
        response_time=89.3, throughput=890.2, error_rate=0.8,
    ))

    logger.info("Demo data seeded")
