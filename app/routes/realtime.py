"""
/ws 푸시 채널.

연결 시 handshake payload 없음. 서버 -> 클라이언트로 {"type": "dashboard_update", "data": ...}
메시지만 흐르고, 클라이언트가 보내는 메시지는 읽어서 버린다.
재연결은 클라이언트 책임 (몇 초 뒤 재시도 권장).
"""

import logging

from fastapi import APIRouter, WebSocket

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def dashboard_ws(websocket: WebSocket) -> None:
    broadcaster = websocket.app.state.broadcaster
    await websocket.accept()
    broadcaster.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("WebSocket closed by client (code=%s)", message.get("code"))
                break
    finally:
        # 정상 종료든 에러든 한 번은 반드시 제거
        broadcaster.disconnect(websocket)
