"""
Notice Aggregator - FastAPI application
"""

import asyncio
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.api import api_router
from app.core.config import settings
from app.core.exceptions import setup_exception_handlers
from app.core.logging import setup_logging
from app.domains.news.facade import build_news_facade
from app.scrapers.config_loader import load_news_config


# Create FastAPI app
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Aggregates dated notices from configured HTML sources",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
)

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status code and duration."""
    start = time.perf_counter()
    logger.info(f"Request received: {request.method} {request.url.path}")
    if request.query_params:
        logger.info(f"Query params: {dict(request.query_params)}")
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)")
    return response


# Setup exception handlers
setup_exception_handlers(app)

# Include API routers
app.include_router(api_router)


async def warm_cache() -> None:
    """Run the first aggregation so early requests hit a warm cache."""
    facade = app.state.news_facade
    try:
        result = await facade.refresh()
        logger.info(f"Initial fetch complete, {result.total} items")
    except Exception as e:
        logger.error(f"Initial fetch failed: {e}")


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} API...")

    config = load_news_config()
    app.state.news_facade = build_news_facade(config)

    if settings.NEWS_WARM_ON_STARTUP:
        app.state.warm_task = asyncio.create_task(warm_cache())

    logger.info("Application startup complete!")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME} API...")
    warm_task = getattr(app.state, "warm_task", None)
    if warm_task is not None and not warm_task.done():
        warm_task.cancel()
    facade = getattr(app.state, "news_facade", None)
    if facade is not None:
        await facade.close()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    facade = getattr(app.state, "news_facade", None)
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": "notice-aggregator",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "sources": len(facade.registry) if facade is not None else 0,
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return JSONResponse(
        status_code=200,
        content={
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": settings.VERSION,
            "docs": "/docs" if settings.ENVIRONMENT != "production" else "Not available in production",
            "health": "/health"
        }
    )
