import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from core.exceptions import UnexpectedError
from store import GENERIC_ERROR, get_store
from api.auth.views import router as auth_router
from api.users.views import router as users_router
from api.locations.views import router as locations_router
from api.reports.views import router as reports_router
from api.technician.views import router as technician_router
from api.dashboard.views import router as dashboard_router
from api.export.views import router as export_router
from api.navigation.views import router as navigation_router

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
        except json.JSONDecodeError:
            origins = None
        if isinstance(origins, list):
            return origins
        # Otherwise treat as comma-separated
        return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
    ]


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Seed the store before the first request
    store = get_store()
    logger.info(
        "Store ready (%s): %d users, %d locations, %d reports",
        settings.APP_ENV,
        len(store.users),
        len(store.locations),
        len(store.reports),
    )
    yield


app = FastAPI(
    title="Maintenance Report Dashboard API",
    description="Role-based tracking of technician field reports, users and locations",
    version="1.0.0",
    lifespan=lifespan,
)

# Get CORS origins from environment or use defaults
cors_origins = get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnexpectedError)
async def unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    # The store already logged the traceback and raised a notification
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR},
    )


# Session endpoints
app.include_router(auth_router, prefix="/api/v1")

# Admin endpoints
app.include_router(users_router, prefix="/api/v1")
app.include_router(locations_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(export_router, prefix="/api/v1")

# Technician endpoints
app.include_router(technician_router, prefix="/api/v1")

app.include_router(navigation_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
