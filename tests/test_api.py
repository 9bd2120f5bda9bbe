# tests/test_api.py

"""
HTTP 조회 API 테스트.

ASGITransport 로 앱을 직접 호출하므로 서버를 띄울 필요가 없다.
lifespan 이 돌지 않기 때문에 시드/ticker 없이 빈 저장소에서 시작한다.
"""

import httpx
import pytest
import pytest_asyncio
from datetime import timedelta

from app.config.settings import Settings
from app.core.seed import seed_demo_data
from app.core.storage import MemStorage
from app.main import create_app
from app.models.logs import SystemLogCreate
from app.models.metrics import SystemMetricsCreate


@pytest.fixture
def app(clock):
    application = create_app(Settings(DEMO_SEED=False, SIMULATION_ENABLED=False))
    # 시간 고정 저장소로 교체
    storage = MemStorage(clock=clock)
    application.state.storage = storage
    application.state.aggregator.storage = storage
    return application


@pytest.fixture
def storage(app):
    return app.state.storage


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_dashboard_on_empty_storage(client):
    resp = await client.get("/api/dashboard")

    assert resp.status_code == 200
    data = resp.json()
    assert data["stats"]["systemStatus"] == "Healthy"
    assert data["stats"]["successRate"] == 0
    assert data["metrics"]["id"] == 0
    assert data["metrics"]["networkIO"] == 0
    assert data["recentDeployments"] == []
    assert data["activeAlerts"] == []


@pytest.mark.asyncio
async def test_dashboard_snapshot_with_seed(client, storage):
    await seed_demo_data(storage)

    data = (await client.get("/api/dashboard")).json()
    stats = (await client.get("/api/dashboard/stats")).json()

    assert data["stats"] == stats
    assert stats == {
        "systemStatus": "Critical",
        "uptime": 99.9,
        "activeDeployments": 1,
        "successRate": 50.0,
        "activeAlerts": 3,
        "criticalAlerts": 2,
        "warningAlerts": 1,
    }
    assert data["metrics"]["cpuUsage"] == 68.5


@pytest.mark.asyncio
async def test_deployments_limit_and_defaulting(client, storage):
    await seed_demo_data(storage)

    assert len((await client.get("/api/deployments")).json()) == 3
    assert len((await client.get("/api/deployments", params={"limit": "2"})).json()) == 2

    # 잘못된 값은 거절하지 않고 기본값(10)
    resp = await client.get("/api/deployments", params={"limit": "abc"})
    assert resp.status_code == 200
    assert len(resp.json()) == 3

    first = (await client.get("/api/deployments", params={"limit": "1"})).json()[0]
    assert first["service"] == "user-service"
    assert first["version"] == "v2.1.4"


@pytest.mark.asyncio
async def test_alerts_resolve_flow(client, storage):
    await seed_demo_data(storage)

    active = (await client.get("/api/alerts")).json()
    assert [a["severity"] for a in active] == ["critical", "critical", "warning"]
    target = active[0]["id"]

    resp = await client.post(f"/api/alerts/{target}/resolve")
    assert resp.status_code == 204

    active_ids = [a["id"] for a in (await client.get("/api/alerts")).json()]
    assert target not in active_ids

    resolved = await client.get(f"/api/alerts/{target}")
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "resolved"


@pytest.mark.asyncio
async def test_resolve_unknown_alert_is_not_an_error(client):
    resp = await client.post("/api/alerts/999/resolve")
    assert resp.status_code == 204

    missing = await client.get("/api/alerts/999")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_latest_metrics_and_history(client, storage, clock):
    assert (await client.get("/api/metrics")).json()["id"] == 0

    for hours_ago in (30, 2, 0):
        await storage.create_metrics(SystemMetricsCreate(
            timestamp=clock() - timedelta(hours=hours_ago),
            cpu_usage=float(hours_ago), memory_usage=1.0, disk_usage=1.0, network_io=1.0,
        ))

    latest = (await client.get("/api/metrics")).json()
    assert latest["cpuUsage"] == 0.0

    history = (await client.get("/api/metrics/history")).json()
    assert [m["cpuUsage"] for m in history] == [2.0, 0.0]

    wide = (await client.get("/api/metrics/history", params={"hours": "48"})).json()
    assert len(wide) == 3

    fallback = (await client.get("/api/metrics/history", params={"hours": "-1"})).json()
    assert len(fallback) == 2


@pytest.mark.asyncio
async def test_pipelines(client, storage):
    await seed_demo_data(storage)

    runs = (await client.get("/api/pipelines")).json()

    assert [r["pipelineName"] for r in runs] == ["feature-auth", "main-pipeline"]
    assert runs[0]["status"] == "running"
    assert runs[0]["endTime"] is None
    assert runs[1]["stages"] == ["build", "test", "deploy"]
    assert runs[1]["triggeredBy"] == "john.doe@company.com"


@pytest.mark.asyncio
async def test_logs_level_filter(client, storage, clock):
    await seed_demo_data(storage)
    await storage.create_system_log(SystemLogCreate(
        timestamp=clock(), level="info", service="auth-service", message="token refreshed",
    ))

    assert len((await client.get("/api/logs")).json()) == 3
    errors = (await client.get("/api/logs", params={"level": "error"})).json()
    assert [log["message"] for log in errors] == ["Connection timeout to database"]
    assert '"timeout": 5000' in errors[0]["metadata"]

    # 빈 level 은 필터 없음
    assert len((await client.get("/api/logs", params={"level": ""})).json()) == 3


@pytest.mark.asyncio
async def test_performance_service_filter(client, storage):
    await seed_demo_data(storage)

    everything = (await client.get("/api/performance")).json()
    gateway = (await client.get("/api/performance", params={"service": "api-gateway"})).json()

    assert len(everything) == 2
    assert len(gateway) == 1
    assert gateway[0]["responseTime"] == 145.2
    assert gateway[0]["errorRate"] == 2.1


@pytest.mark.asyncio
async def test_huge_hours_window_returns_all_samples(client, storage, clock):
    await seed_demo_data(storage)
    await storage.create_metrics(SystemMetricsCreate(
        timestamp=clock() - timedelta(days=3650),
        cpu_usage=1.0, memory_usage=1.0, disk_usage=1.0, network_io=1.0,
    ))

    history = await client.get("/api/metrics/history", params={"hours": "100000000"})
    perf = await client.get("/api/performance", params={"hours": "100000000"})

    assert history.status_code == 200
    assert len(history.json()) == 2
    assert perf.status_code == 200
    assert len(perf.json()) == 2


@pytest.mark.asyncio
async def test_internal_fault_maps_to_generic_500(client, storage, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("dict changed size during iteration")

    monkeypatch.setattr(storage, "get_deployments", broken)

    resp = await client.get("/api/deployments")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to fetch deployments"}


@pytest.mark.asyncio
async def test_dashboard_fault_maps_to_generic_500(client, app, monkeypatch):
    async def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.aggregator, "get_realtime_data", broken)

    resp = await client.get("/api/dashboard")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to fetch dashboard data"}
