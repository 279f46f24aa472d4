# terralink/main.py
# ------------------------------------------------------------
# FastAPI entrypoint for the TerraLink dashboard backend.
#
# Responsibilities:
# - App initialization & middleware
# - Error handlers
# - Route registration
# - Startup: dataset loading + live simulation loop
# ------------------------------------------------------------

from contextlib import asynccontextmanager
import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .exceptions import FarmNotFoundError
from .store import get_store, get_live_simulation
from .routes import alerts, farms, health, overview, readings, stream

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Lifespan: bootstrap + background simulation
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast on a bad dataset before serving anything
    store = get_store()
    logger.info("Dataset ready: %d readings, %d farms", len(store), len(store.farm_ids()))

    task = None
    if settings.generators_enabled:
        sim = get_live_simulation()

        async def loop_live():
            while True:
                sim.tick()
                await asyncio.sleep(max(1, settings.live_rate_sec))

        task = asyncio.create_task(loop_live())

    try:
        yield
    finally:
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)


# ------------------------------------------------------------
# FastAPI application instance
# ------------------------------------------------------------
app = FastAPI(
    title="TerraLink Dashboard API",
    version="0.1.0",
    description="Farm sensor monitoring and microinsurance alert triggers",
    lifespan=lifespan,
)


# ------------------------------------------------------------
# CORS configuration
# Allows frontend dashboards to connect safely
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------
# Error handlers
# ------------------------------------------------------------
@app.exception_handler(FarmNotFoundError)
async def farm_not_found_handler(request: Request, exc: FarmNotFoundError):
    return JSONResponse(
        status_code=404,
        content={"ok": False, "error": str(exc), "farmId": exc.farm_id},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": str(exc), "path": str(request.url)},
    )


# ------------------------------------------------------------
# API routes
# ------------------------------------------------------------
app.include_router(readings.router)
app.include_router(alerts.router)
app.include_router(farms.router)
app.include_router(overview.router)
app.include_router(stream.router)
app.include_router(health.router)
