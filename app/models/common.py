# API 전체에서 공통으로 쓰이는 스키마/타입 모아둔 곳

from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DeploymentStatus = Literal["success", "failed", "in_progress"]
AlertSeverity = Literal["critical", "warning", "info"]
AlertStatus = Literal["active", "resolved"]
PipelineStatus = Literal["running", "success", "failed", "cancelled"]
LogLevel = Literal["error", "warn", "info", "debug"]
SystemStatus = Literal["Healthy", "Warning", "Critical"]


def _as_utc(value: datetime) -> datetime:
    # tz 없는 값은 UTC 로 간주. 저장소는 aware 값끼리만 비교한다.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """
    대시보드 프론트엔드는 camelCase JSON(cpuUsage, triggeredBy ...)을 기대한다.
    파이썬 쪽은 snake_case 속성을 쓰고, 직렬화할 때만 alias로 바꾼다.
    입력은 두 표기 모두 허용.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
