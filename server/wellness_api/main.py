"""Wellness Tracker API - FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import db_manager
from .routes import auth, metrics
from .services.errors import UnauthorizedError, WellnessError

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_manager.init_schema()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Wellness Tracker API",
    description="Daily steps, sleep and mood tracking with summaries and export",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Include routers
app.include_router(auth.router)
app.include_router(metrics.router)


@app.exception_handler(WellnessError)
async def wellness_error_handler(request: Request, exc: WellnessError):
    """Map domain errors to their HTTP status."""
    logger.info(f"[API] {request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


@app.get("/api/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "wellness-api"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "server.wellness_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
