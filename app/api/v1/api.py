from fastapi import APIRouter
from app.api.v1.endpoints import interactions, preferences, matching

api_router = APIRouter()
api_router.include_router(interactions.router, prefix="/interactions", tags=["interactions"])
api_router.include_router(preferences.router, tags=["preferences"])
api_router.include_router(matching.router, tags=["matching"])
