from fastapi import APIRouter
from api.endpoints.rank import router as rank_router
from api.endpoints.generate import router as generate_router
from api.endpoints.download import router as download_router
from api.endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(rank_router, tags=["rank"])
api_router.include_router(generate_router, tags=["generate"])
api_router.include_router(download_router, tags=["download"])
api_router.include_router(health_router, tags=["health"])
