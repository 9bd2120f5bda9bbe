from __future__ import annotations

from typing import List, Optional

from pydantic import field_validator

from app.models.common import CamelModel, PipelineStatus, UtcDatetime


class PipelineRunCreate(CamelModel):
    """Payload for inserting a CI/CD pipeline run."""

    pipeline_name: str
    branch: str
    commit: str
    status: PipelineStatus
    start_time: UtcDatetime
    end_time: Optional[UtcDatetime] = None
    duration: Optional[int] = None
    stages: Optional[List[str]] = None
    triggered_by: str


class PipelineRunUpdate(CamelModel):
    """
    Partial update for a pipeline run.

    실행 중에 바뀌는 필드만 허용한다. 명시적으로 넘긴 필드만 반영되므로
    end_time=None 처럼 값을 지우는 것도 가능.
    """

    status: Optional[PipelineStatus] = None
    end_time: Optional[UtcDatetime] = None
    duration: Optional[int] = None
    stages: Optional[List[str]] = None

    @field_validator("status")
    @classmethod
    def _status_not_null(cls, value):
        # 상태는 지울 수 없다. 생략만 가능
        if value is None:
            raise ValueError("status cannot be null")
        return value


class PipelineRun(PipelineRunCreate):
    id: int
