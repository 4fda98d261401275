"""
API router configuration.
"""

from fastapi import APIRouter

from app.api.endpoints import news

api_router = APIRouter(prefix="/api")

api_router.include_router(news.router)
