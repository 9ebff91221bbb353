import os
import logging
import logging.config
import asyncio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime
from sqlalchemy import text
from contextlib import asynccontextmanager

from arq import create_pool
from arq.connections import RedisSettings
from feedhub.db.base import Base
from feedhub.db.session import engine, async_session
from feedhub.api.routes import changelogs, feedback, projects, roadmap, system, tags

# Load logging config if present
if os.path.exists("logging.conf"):
    logging.config.fileConfig("logging.conf", disable_existing_loggers=False)
logger = logging.getLogger("root")

# Detect environment (default to production)
ENV = os.getenv("APP_ENV", "production").lower()
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    app.state.redis = await create_pool(RedisSettings.from_dsn(REDIS_URL))
    logger.info("Database initialized")

    yield  # App runs here

    await app.state.redis.close()
    logger.info("Shutting down...")


app = FastAPI(
    title="Feedhub API",
    version="0.1",
    lifespan=lifespan,
)

# Dev-only CORS settings
if ENV == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS allowed for development environment")
elif CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS restricted to {', '.join(CORS_ORIGINS)}")

# API routes
app.include_router(projects.router)
app.include_router(feedback.router)
app.include_router(tags.router)
app.include_router(changelogs.router)
app.include_router(roadmap.router)
app.include_router(system.router)


@app.api_route("/api/health", methods=["GET", "HEAD"])
async def health(request: Request):
    status = {
        "api": "ok",
        "database": None,
        "redis": None,
        "worker": None,
    }

    http_status = 200

    # --- Database check ---
    try:
        async with async_session() as db:
            await db.execute(text("SELECT 1"))
        status["database"] = "connected"
    except Exception as e:
        status["database"] = f"error: {e}"
        http_status = 503

    # --- Redis check with lazy reconnect + backoff ---
    try:
        redis = request.app.state.redis
        try:
            await redis.ping()
            status["redis"] = "connected"
        except Exception:
            logger.warning("Redis connection lost, attempting reconnect...")
            redis = await reconnect_redis_with_backoff()
            request.app.state.redis = redis
            status["redis"] = "reinitialized"
    except Exception as e:
        status["redis"] = f"error: {e}"
        http_status = 503

    # --- Worker heartbeat ---
    try:
        heartbeat = await request.app.state.redis.get("arq:heartbeat")
        if heartbeat:
            last_heartbeat = datetime.fromtimestamp(float(heartbeat))
            status["worker"] = f"running (last heartbeat {last_heartbeat.isoformat()})"
        else:
            status["worker"] = "not reporting"
            http_status = 503
    except Exception as e:
        status["worker"] = f"error: {e}"
        http_status = 503

    return JSONResponse(content=status, status_code=http_status)


async def reconnect_redis_with_backoff(max_retries: int = 3, base_delay: float = 1.0):
    """
    Attempt to reconnect to Redis using exponential backoff.
    Returns the new Redis pool or raises after all retries fail.
    """
    for attempt in range(max_retries):
        try:
            redis = await create_pool(RedisSettings.from_dsn(REDIS_URL))
            await redis.ping()
            logger.info(f"Redis reconnected on attempt {attempt + 1}")
            return redis
        except Exception as e:
            wait_time = base_delay * (2**attempt)
            logger.warning(f"Redis reconnect attempt {attempt + 1} failed: {e}")
            await asyncio.sleep(wait_time)
    raise RuntimeError("Failed to reconnect to Redis after multiple attempts")
