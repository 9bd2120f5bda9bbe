from __future__ import annotations

from pydantic import Field

from app.models.common import CamelModel, UtcDatetime


class SystemMetricsCreate(CamelModel):
    """호스트 단위 리소스 사용률 샘플. cpu/memory/disk 는 %, network_io 는 MB/s."""

    timestamp: UtcDatetime
    cpu_usage: float = Field(ge=0.0, le=100.0)
    memory_usage: float = Field(ge=0.0, le=100.0)
    disk_usage: float = Field(ge=0.0, le=100.0)
    # to_camel 은 "networkIo" 를 만들기 때문에 명시적으로 지정
    network_io: float = Field(ge=0.0, alias="networkIO")


class SystemMetrics(SystemMetricsCreate):
    id: int


class PerformanceMetricsCreate(CamelModel):
    """서비스 단위 성능 샘플."""

    timestamp: UtcDatetime
    service: str
    response_time: float  # ms
    throughput: float  # req/s
    error_rate: float  # %


class PerformanceMetrics(PerformanceMetricsCreate):
    id: int
