# app/config/settings.py
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 일반
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000,http://localhost:8080"

    # 실시간 tick (mutate -> broadcast) 주기
    TICK_INTERVAL_SECONDS: float = 5.0

    # 시뮬레이션 (실제 수집기가 없을 때 데모용)
    SIMULATION_ENABLED: bool = True
    SIMULATION_SEED: Optional[int] = None
    DEPLOYMENT_PROBABILITY: float = 0.10
    ALERT_PROBABILITY: float = 0.05

    # 시작 시 샘플 데이터 주입
    DEMO_SEED: bool = True

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
