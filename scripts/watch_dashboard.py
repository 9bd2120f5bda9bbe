"""
/ws 푸시 채널을 구독해서 dashboard_update 를 한 줄 요약으로 출력하는 CLI.

Usage:
  python scripts/watch_dashboard.py --url ws://127.0.0.1:8000/ws
  python scripts/watch_dashboard.py --count 5   # 5개 받고 종료

서버가 재연결을 해주지 않으므로 연결이 끊기거나 핸드셰이크가 실패하면
고정 간격(--retry) 뒤 다시 붙는다.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from typing import Any, Dict, Optional

import websockets
from websockets.exceptions import WebSocketException

logger = logging.getLogger("watch-dashboard")

DEFAULT_URL = os.getenv("DASHBOARD_WS_URL", "ws://127.0.0.1:8000/ws")


def format_update(message: Dict[str, Any]) -> Optional[str]:
    """dashboard_update 메시지를 요약 문자열로. 다른 타입이면 None."""
    if message.get("type") != "dashboard_update":
        return None
    data = message.get("data") or {}
    stats = data.get("stats") or {}
    metrics = data.get("metrics") or {}
    return (
        f"[{stats.get('systemStatus', '?')}] "
        f"cpu={metrics.get('cpuUsage', 0):.1f}% "
        f"mem={metrics.get('memoryUsage', 0):.1f}% "
        f"disk={metrics.get('diskUsage', 0):.1f}% "
        f"net={metrics.get('networkIO', 0):.1f}MB/s | "
        f"alerts={stats.get('activeAlerts', 0)} "
        f"(critical={stats.get('criticalAlerts', 0)}, warning={stats.get('warningAlerts', 0)}) | "
        f"success={stats.get('successRate', 0)}% "
        f"deploying={stats.get('activeDeployments', 0)}"
    )


async def watch(url: str, retry: float, count: Optional[int]) -> None:
    received = 0
    while count is None or received < count:
        try:
            async with websockets.connect(url) as ws:
                logger.info("WebSocket connected: %s", url)
                async for raw in ws:
                    try:
                        line = format_update(json.loads(raw))
                    except (json.JSONDecodeError, TypeError, ValueError) as exc:
                        logger.error("Error parsing WebSocket message: %s", exc)
                        continue
                    if line is None:
                        continue
                    print(line, flush=True)
                    received += 1
                    if count is not None and received >= count:
                        return
        except (WebSocketException, OSError) as exc:
            logger.warning("WebSocket disconnected (%s), reconnecting in %.1fs", exc, retry)
        await asyncio.sleep(retry)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print realtime dashboard updates")
    parser.add_argument("--url", default=DEFAULT_URL)
    parser.add_argument("--retry", type=float, default=3.0, help="reconnect delay in seconds")
    parser.add_argument("--count", type=int, default=None, help="exit after N updates")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        asyncio.run(watch(args.url, args.retry, args.count))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
