from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pumpboard.api.deps import get_list_pump_pools_use_case
from pumpboard.api.routers.pump_pools import router as pump_pools_router
from pumpboard.api.routers.top_market import router as top_market_router
from pumpboard.infrastructure.polling.pools_refresher import PoolsRefresher
from pumpboard.shared.config import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    refresher: PoolsRefresher | None = None
    if settings.poll_interval_seconds > 0 and settings.poll_periods:
        refresher = PoolsRefresher(
            use_case=get_list_pump_pools_use_case(),
            periods=settings.poll_periods,
            interval_seconds=settings.poll_interval_seconds,
        )
        refresher.start()
    try:
        yield
    finally:
        if refresher is not None:
            await refresher.stop()


app = FastAPI(title="Pumpboard API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(pump_pools_router)
app.include_router(top_market_router)
