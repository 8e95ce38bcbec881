import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from forum.cache import cache
from forum.config import settings
from forum.database import engine
from forum.exception_handlers import setup_exception_handlers
from forum.middleware import RequestContextMiddleware, RequestIdFilter
from forum.routers import comments, metrics, subs, users

_log_handler = logging.StreamHandler()
_log_handler.addFilter(RequestIdFilter())
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s",
    handlers=[_log_handler],
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await cache.connect()
    logger.info("Forum API started (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await cache.disconnect()
    await engine.dispose()

app = FastAPI(
    title="Forum API",
    description="Users, credentials and threaded comments on posts",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestContextMiddleware)

# Error mapping
setup_exception_handlers(app)

# Routers
app.include_router(users.router)
app.include_router(subs.router)
app.include_router(comments.router)
app.include_router(metrics.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
