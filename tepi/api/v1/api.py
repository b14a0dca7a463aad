"""V1 API router aggregation."""
from fastapi import APIRouter

from tepi.api.v1.endpoints import feed, marketplace

api_router = APIRouter(prefix="/v1")
api_router.include_router(feed.router)
api_router.include_router(marketplace.router)
