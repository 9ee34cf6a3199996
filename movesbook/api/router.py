"""API router configuration.

Mounts the endpoint routers of each feature area; the result is included
by the application under ``API_V1_PREFIX``.
"""

from fastapi import APIRouter

from movesbook.api.endpoints import auth, defaults, health, plans

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(defaults.router, prefix="/defaults", tags=["defaults"])
