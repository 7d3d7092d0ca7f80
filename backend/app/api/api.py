"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from app.api.endpoints import health, sitemap

# Create main API router
api_router = APIRouter()

api_router.include_router(sitemap.router, tags=["sitemap"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
