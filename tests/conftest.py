# tests/conftest.py

"""
pytest 설정 및 공통 fixture.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# 프로젝트 루트를 PYTHONPATH에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.storage import MemStorage  # noqa: E402


class FixedClock:
    """테스트용 시계. 직접 advance() 하기 전까지 시간이 흐르지 않는다."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage(clock):
    return MemStorage(clock=clock)
