"""
RealtimeTicker.

고정 주기로 simulator.step() -> broadcaster.publish() 를 순서대로 실행한다.
mutate 가 끝난 뒤에 broadcast 가 읽으므로 같은 tick 안에서 읽기/쓰기가 섞이지 않는다.
한 tick 에서 예외가 나도 로그만 남기고 다음 tick 은 그대로 돈다.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Optional

from app.core.broadcaster import DashboardBroadcaster
from app.core.simulator import MetricsSimulator

logger = logging.getLogger(__name__)


class RealtimeTicker:
    def __init__(
        self,
        broadcaster: DashboardBroadcaster,
        simulator: Optional[MetricsSimulator] = None,
        *,
        interval: float = 5.0,
    ) -> None:
        self.broadcaster = broadcaster
        self.simulator = simulator
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> int:
        """한 번의 mutate-then-broadcast. 전송된 구독자 수를 반환."""
        if self.simulator is not None:
            try:
                await self.simulator.step()
            except Exception:
                logger.exception("Simulation step failed")

        try:
            return await self.broadcaster.publish()
        except Exception:
            logger.exception("Error broadcasting update")
            return 0

    async def run(self) -> None:
        logger.info("Realtime ticker started (interval=%.1fs)", self.interval)
        while True:
            await asyncio.sleep(self.interval)
            await self.tick()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        logger.info("Realtime ticker stopped")
