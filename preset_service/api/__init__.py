from fastapi import APIRouter
from . import presets

api_router = APIRouter()

# Include all API routes
api_router.include_router(presets.router, prefix="/presets", tags=["presets"])
