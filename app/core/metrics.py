"""
System metric metadata helpers.

cpu/memory/disk 는 0~100 퍼센트(percent), network_io 는 상한 없는 MB/s 값(rate)이다.
시뮬레이터가 샘플을 흔들 때(jitter) 쓰는 변동폭과 clamp 정책을 한 곳에서 관리한다.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Literal


MetricKind = Literal["percent", "rate"]

PERCENT_MAX = 100.0


@dataclass(frozen=True)
class MetricMeta:
    name: str
    kind: MetricKind = "rate"
    clamp_min: float = 0.0
    jitter: float = 0.0  # 한 tick 에 허용되는 최대 변동폭 (±)

    @property
    def clamp_max(self) -> float | None:
        # percent 는 100 이 상한, rate 는 상한 없음
        return PERCENT_MAX if self.kind == "percent" else None

    def clamp(self, value: float) -> float:
        if value != value:  # NaN
            return self.clamp_min
        if value < self.clamp_min:
            return self.clamp_min
        upper = self.clamp_max
        if upper is not None and value > upper:
            return upper
        return value

    def nudge(self, value: float, rng: random.Random) -> float:
        """value 에 [-jitter, +jitter] 균등분포 변동을 더한 뒤 clamp."""
        return self.clamp(value + rng.uniform(-self.jitter, self.jitter))


_METRICS: Dict[str, MetricMeta] = {
    "cpu_usage":    MetricMeta(name="cpu_usage", kind="percent", jitter=5.0),
    "memory_usage": MetricMeta(name="memory_usage", kind="percent", jitter=2.5),
    "disk_usage":   MetricMeta(name="disk_usage", kind="percent", jitter=1.0),
    "network_io":   MetricMeta(name="network_io", kind="rate", jitter=25.0),
}

# 시뮬레이터가 갱신하는 순서
SYSTEM_METRIC_NAMES = tuple(_METRICS)


def get_metric_meta(metric_name: str) -> MetricMeta:
    """메트릭 이름에 해당하는 메타데이터. 등록되지 않은 이름은 KeyError."""
    return _METRICS[metric_name]
