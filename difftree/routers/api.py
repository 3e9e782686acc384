from fastapi import APIRouter

from difftree.routers.health import router as health_router
from difftree.routers.trees import router as trees_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health_router)
api_router.include_router(trees_router)
