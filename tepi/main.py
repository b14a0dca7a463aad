"""Tepi API - FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from tepi.api.v1.api import api_router
from tepi.core.config import settings
from tepi.core.logging import configure_logging
from tepi.services.feed_state import FeedStateRegistry
from tepi.services.providers import select_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    provider = await select_provider(settings)
    app.state.provider = provider
    app.state.feed_states = FeedStateRegistry(provider, max_viewers=settings.FEED_STATE_MAX_VIEWERS)
    logger.info("Running in %s mode - API: /api/v1 | Docs: /docs | Ready: /ready", provider.mode)
    yield
    await provider.close()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": "/api/v1",
    }


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/ready")
async def ready(request: Request):
    """Reports provider mode and, in live mode, database reachability."""
    report = await request.app.state.provider.ready()
    if report.get("status") != "ok":
        return JSONResponse(status_code=503, content=report)
    return report
