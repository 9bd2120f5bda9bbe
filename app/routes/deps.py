"""
FastAPI dependencies.

저장소/집계기는 앱 인스턴스마다 하나씩 만들어 app.state 에 올려두고,
라우트는 여기서 꺼내 쓴다 (전역 싱글톤 없음).
"""

from fastapi import Request

from app.core.aggregator import DashboardAggregator
from app.core.storage import MemStorage


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_aggregator(request: Request) -> DashboardAggregator:
    return request.app.state.aggregator
