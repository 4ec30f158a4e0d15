from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger

from preset_service import __version__
from preset_service.api import api_router
from preset_service.core.config import settings
from preset_service.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.LOG_LEVEL)
    settings.DATA_ROOT.mkdir(parents=True, exist_ok=True)
    logger.info(f"Preset API starting up (data root: {settings.DATA_ROOT})")
    yield
    # Shutdown
    logger.info("Preset API shutting down...")


app = FastAPI(
    title="Preset Store API",
    description="Per-user, per-backend preset storage",
    version=__version__,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Preset Store API", "version": __version__}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True if settings.DEBUG else False
    )
