import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Load environment variables
load_dotenv()

from taskify.api import auth, projects, statuses, tasks
from taskify.core.access_gate import AccessGateMiddleware
from taskify.core.config import settings
from taskify.core.database import engine, get_db
from taskify.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from taskify.core.logging_setup import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger("taskify.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info(f"Starting {settings.project_name} API...")
    logger.info(f"Public routes: {settings.public_routes}")
    logger.info(f"Frontend URL: {settings.frontend_url}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.project_name} API...")
    await engine.dispose()


app = FastAPI(
    title="Taskify - Project & Task API",
    description="Multi-tenant projects, tasks and workflow statuses",
    version="0.1.0",
    lifespan=lifespan
)

# The gate must see every request; CORS is added last so it wraps the gate
# and answers preflight requests before they are redirected.
app.add_middleware(AccessGateMiddleware, config=settings)

allowed_origins = list(dict.fromkeys([settings.frontend_url, *settings.allowed_origins]))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth.router)
app.include_router(statuses.router)
app.include_router(projects.router)
app.include_router(tasks.router)


# Error mapping
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": f"{exc.entity} not found"})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    # Same body as a missing resource so non-owners learn nothing about it
    logger.warning(exc.message)
    return JSONResponse(status_code=404, content={"detail": f"{exc.entity} not found"})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=503, content={"detail": "Storage temporarily unavailable"})


class HealthResponse(BaseModel):
    status: str
    database_connected: bool


@app.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check API and database health"""
    try:
        await db.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        database_ok = False

    return HealthResponse(status="ok", database_connected=database_ok)
