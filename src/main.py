"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import auth, contact, events, projects
from src.config import get_settings
from src.services.errors import AppError
from src.services.notifier import MailjetNotifier
from src.services.storage import create_blob_store

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open external service clients at startup and close them at shutdown."""
    app.state.blob_store = create_blob_store(settings)
    app.state.notifier = MailjetNotifier(settings)
    yield
    app.state.blob_store.close()


app = FastAPI(
    title="Showcase CMS API",
    description="Content backend for the marketing site: projects, events and their images",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render service errors in the same shape as HTTPException."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Register routers
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(events.router)
app.include_router(contact.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
