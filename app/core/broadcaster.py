"""
DashboardBroadcaster.

연결된 /ws 구독자 집합을 관리하고, tick 마다 스냅샷 하나를 직렬화해서
모든 구독자에게 같은 바이트로 내려보낸다.

- 구독자는 connect 시 추가, disconnect/에러 시 제거 (제거는 멱등)
- OPEN 상태가 아닌 채널은 조용히 건너뛴다. 정리는 그 채널의 disconnect 핸들러 몫
- 한 구독자에게 전송이 실패해도 나머지 구독자 전송은 계속된다
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Set

from fastapi.websockets import WebSocketState

from app.core.aggregator import DashboardAggregator
from app.core.errors import BroadcastError
from app.models.dashboard import DashboardUpdate

logger = logging.getLogger(__name__)


def is_open(subscriber: Any) -> bool:
    return (
        subscriber.client_state == WebSocketState.CONNECTED
        and subscriber.application_state == WebSocketState.CONNECTED
    )


class DashboardBroadcaster:
    def __init__(self, aggregator: DashboardAggregator) -> None:
        self.aggregator = aggregator
        self._subscribers: Set[Any] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def connect(self, subscriber: Any) -> None:
        self._subscribers.add(subscriber)
        logger.info("Client connected to WebSocket (%d subscribers)", len(self._subscribers))

    def disconnect(self, subscriber: Any) -> bool:
        """구독자를 제거한다. 이미 제거된 경우 False."""
        if subscriber not in self._subscribers:
            return False
        self._subscribers.discard(subscriber)
        logger.info("Client disconnected from WebSocket (%d subscribers)", len(self._subscribers))
        return True

    async def publish(self) -> int:
        """
        스냅샷을 한 번 계산해서 모든 OPEN 구독자에게 보낸다.

        Returns
        -------
        int
            실제로 전송에 성공한 구독자 수. 구독자가 없으면 스냅샷 계산도 하지 않고 0.
        """
        if not self._subscribers:
            return 0

        snapshot = await self.aggregator.get_realtime_data()
        payload = DashboardUpdate(data=snapshot).model_dump_json(by_alias=True)
        return await self.broadcast(payload)

    async def broadcast(self, payload: str) -> int:
        targets = [s for s in tuple(self._subscribers) if is_open(s)]
        if not targets:
            return 0

        results = await asyncio.gather(
            *(self._safe_send(s, payload) for s in targets),
            return_exceptions=True,
        )
        return sum(1 for r in results if r is True)

    async def _safe_send(self, subscriber: Any, payload: str) -> bool:
        try:
            await self._send(subscriber, payload)
        except BroadcastError as exc:
            logger.warning("Dropping WebSocket subscriber after failed send: %s", exc)
            self.disconnect(subscriber)
            return False
        return True

    async def _send(self, subscriber: Any, payload: str) -> None:
        try:
            await subscriber.send_text(payload)
        except Exception as exc:
            raise BroadcastError(str(exc) or exc.__class__.__name__) from exc
