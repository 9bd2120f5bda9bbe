import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

from app.config.settings import Settings, settings as default_settings
from app.core.aggregator import DashboardAggregator
from app.core.broadcaster import DashboardBroadcaster
from app.core.seed import seed_demo_data
from app.core.simulator import MetricsSimulator
from app.core.storage import MemStorage
from app.core.ticker import RealtimeTicker
from app.routes import alerts, dashboard, deployments, logs, metrics, performance, pipelines, realtime

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings

    # 이미 데이터가 있으면 시드하지 않음
    if cfg.DEMO_SEED and app.state.storage.is_empty():
        await seed_demo_data(app.state.storage)

    app.state.ticker.start()
    try:
        yield
    finally:
        await app.state.ticker.stop()


def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    """
    앱 인스턴스마다 저장소/집계기/브로드캐스터/ticker 를 새로 만든다.
    테스트는 원하는 Settings 로 독립된 앱을 만들어 쓴다.
    """
    cfg = cfg or default_settings
    logging.basicConfig(level=cfg.LOG_LEVEL.upper())

    app = FastAPI(title="Realtime Ops Dashboard", version="0.1.0", lifespan=lifespan)

    storage = MemStorage()
    aggregator = DashboardAggregator(storage)
    broadcaster = DashboardBroadcaster(aggregator)
    simulator = None
    if cfg.SIMULATION_ENABLED:
        simulator = MetricsSimulator(
            storage,
            rng=random.Random(cfg.SIMULATION_SEED),
            deployment_probability=cfg.DEPLOYMENT_PROBABILITY,
            alert_probability=cfg.ALERT_PROBABILITY,
        )

    app.state.settings = cfg
    app.state.storage = storage
    app.state.aggregator = aggregator
    app.state.broadcaster = broadcaster
    app.state.ticker = RealtimeTicker(broadcaster, simulator, interval=cfg.TICK_INTERVAL_SECONDS)

    # CORS 설정 (대시보드 UI 는 별도 origin 에서 서빙됨)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(deployments.router, prefix="/api/deployments", tags=["deployments"])
    app.include_router(alerts.router, prefix="/api/alerts", tags=["alerts"])
    app.include_router(metrics.router, prefix="/api/metrics", tags=["metrics"])
    app.include_router(pipelines.router, prefix="/api/pipelines", tags=["pipelines"])
    app.include_router(logs.router, prefix="/api/logs", tags=["logs"])
    app.include_router(performance.router, prefix="/api/performance", tags=["performance"])
    app.include_router(realtime.router, tags=["realtime"])

    @app.exception_handler(Exception)
    async def unhandled_ex(request: Request, exc: Exception):
        # 전역 예외 처리: 내부 사정은 로그로만 남기고 일반화된 500 반환
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False)
