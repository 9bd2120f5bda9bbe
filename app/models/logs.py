from __future__ import annotations

from typing import Optional

from app.models.common import CamelModel, LogLevel, UtcDatetime


class SystemLogCreate(CamelModel):
    timestamp: UtcDatetime
    level: LogLevel
    service: str
    message: str
    metadata: Optional[str] = None  # JSON 문자열 그대로 보관


class SystemLog(SystemLogCreate):
    id: int
