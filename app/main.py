from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from app.api import api_router
from app.config import get_settings
from app.utils.logging import setup_logger

settings = get_settings()
logger = setup_logger("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for the FastAPI application."""
    # Startup
    if settings.STORAGE_BACKEND == "sql":
        from app.database import engine, init_db
        try:
            logger.info("Creating database tables...")
            init_db()
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Error during startup: {e}")
            raise

    yield

    # Shutdown
    if settings.STORAGE_BACKEND == "sql":
        logger.info("Closing database connections...")
        engine.dispose()
        logger.info("Database connections closed successfully")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok", "version": settings.APP_VERSION}

if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
