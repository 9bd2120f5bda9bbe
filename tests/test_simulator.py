# tests/test_simulator.py

"""
simulator(MetricsSimulator) 단위 테스트.
"""

import random

import pytest
from datetime import timedelta

from app.core.simulator import (
    ALERT_SERVICES,
    ALERT_TITLES,
    DEPLOY_SERVICES,
    MetricsSimulator,
)
from app.models.metrics import SystemMetricsCreate


def make_simulator(storage, seed=7, deployment_probability=0.0, alert_probability=0.0):
    return MetricsSimulator(
        storage,
        rng=random.Random(seed),
        deployment_probability=deployment_probability,
        alert_probability=alert_probability,
    )


async def add_sample(storage, ts, cpu=68.5, memory=45.2, disk=82.1, network=124.5):
    return await storage.create_metrics(SystemMetricsCreate(
        timestamp=ts, cpu_usage=cpu, memory_usage=memory, disk_usage=disk, network_io=network,
    ))


@pytest.mark.asyncio
async def test_step_without_metrics_creates_nothing(storage):
    sim = make_simulator(storage)

    await sim.step()

    assert storage.is_empty()


@pytest.mark.asyncio
async def test_step_replaces_latest_metrics_within_bounds(storage, clock):
    original = await add_sample(storage, clock() - timedelta(seconds=5))
    assert (await storage.get_latest_metrics()) == original

    sim = make_simulator(storage)
    await sim.step()

    latest = await storage.get_latest_metrics()
    assert latest.id == 2
    assert latest.timestamp == clock()
    assert 63.5 <= latest.cpu_usage <= 73.5
    assert 42.7 <= latest.memory_usage <= 47.7
    assert 81.1 <= latest.disk_usage <= 83.1
    assert 99.5 <= latest.network_io <= 149.5


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(10))
async def test_perturbation_is_clamped(storage, clock, seed):
    await add_sample(storage, clock(), cpu=99.0, memory=0.5, disk=100.0, network=3.0)
    sim = make_simulator(storage, seed=seed)

    for _ in range(5):
        clock.advance(seconds=5)
        await sim.step()
        latest = await storage.get_latest_metrics()
        assert 0.0 <= latest.cpu_usage <= 100.0
        assert 0.0 <= latest.memory_usage <= 100.0
        assert 0.0 <= latest.disk_usage <= 100.0
        assert latest.network_io >= 0.0


@pytest.mark.asyncio
async def test_step_never_creates_records_with_zero_probability(storage, clock):
    await add_sample(storage, clock())
    sim = make_simulator(storage)

    for _ in range(50):
        await sim.step()

    assert await storage.get_deployments() == []
    assert await storage.get_active_alerts() == []


@pytest.mark.asyncio
async def test_step_always_creates_records_with_full_probability(storage, clock):
    await add_sample(storage, clock())
    sim = make_simulator(storage, deployment_probability=1.0, alert_probability=1.0)

    await sim.step()

    deployments = await storage.get_deployments()
    alerts = await storage.get_active_alerts()
    assert len(deployments) == 1
    assert len(alerts) == 1
    assert alerts[0].status == "active"
    assert alerts[0].title in ALERT_TITLES
    assert alerts[0].service in ALERT_SERVICES


@pytest.mark.asyncio
async def test_random_deployments_follow_status_rules(storage):
    sim = make_simulator(storage, seed=3)

    for _ in range(60):
        await sim.create_random_deployment()

    deployments = await storage.get_deployments(limit=None)
    assert {d.status for d in deployments} == {"success", "failed", "in_progress"}
    for d in deployments:
        assert d.service in DEPLOY_SERVICES
        assert d.version.startswith("v")
        major, minor, patch = (int(p) for p in d.version[1:].split("."))
        assert 1 <= major <= 5 and 0 <= minor <= 9 and 0 <= patch <= 9
        if d.status == "in_progress":
            assert d.duration is None
        else:
            assert 30 <= d.duration < 330
