"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from jobboard.agents.cv_scorer import CvScorer, create_scoring_model
from jobboard.api.limiter import limiter
from jobboard.config import settings
from jobboard.db import DocumentStore, create_db_engine, init_db
from jobboard.errors import DownstreamError, ListingError
from jobboard.resources import build_resources
from jobboard.services.cv_analysis import CvAnalyzer
from jobboard.tools.blob_store import BlobStore
from jobboard.tools.logo import LogoResolver
from jobboard.tools.notifications import NotificationSink

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    store: DocumentStore | None = None,
    logos: LogoResolver | None = None,
    scorer: CvScorer | None = None,
    blobs: BlobStore | None = None,
    notifications: NotificationSink | None = None,
) -> FastAPI:
    """
    Build the API with its collaborators.

    Args:
        store: Document store (defaults to one on DATABASE_URL)
        logos: Logo resolver used by enrichment
        scorer: CV scorer (defaults to the configured chat model)
        blobs: CV blob store
        notifications: Sink for subscription events

    Returns:
        Configured FastAPI app
    """
    logging.basicConfig(level=logging.INFO)

    store = store or DocumentStore(create_db_engine(settings.database_url))
    resources = build_resources(store, logos, notifications)
    blobs = blobs or BlobStore()
    scorer = scorer or CvScorer(create_scoring_model())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the schema and the default admin on startup."""
        init_db(store.engine)
        resources.admins.ensure_default_admin()
        yield

    app = FastAPI(
        title="Job Board API",
        description="Job, internship and certification listings with AI CV analysis",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.state.resources = resources
    app.state.blobs = blobs
    app.state.analyzer = CvAnalyzer(resources, blobs, scorer)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Return 429 with a clear message when rate limit is exceeded."""
        return JSONResponse(
            status_code=429,
            content={"detail": f"Rate limit exceeded: {exc.detail}"},
        )

    @app.exception_handler(ListingError)
    async def listing_error_handler(request: Request, exc: ListingError):
        if isinstance(exc, DownstreamError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            detail = exc.message if settings.is_development else "Internal server error"
            return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message, "message": detail})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        detail = str(exc) if settings.is_development else "Internal server error"
        return JSONResponse(status_code=500, content={"error": "Request failed", "message": detail})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    from jobboard.api.routes import (
        admin,
        ai,
        certifications,
        internships,
        jobs,
        s3,
        sarkari_jobs,
        subscriptions,
        walking,
    )

    app.include_router(jobs.router, prefix=f"{API_PREFIX}/jobs", tags=["Jobs"])
    app.include_router(sarkari_jobs.router, prefix=f"{API_PREFIX}/sarkari-jobs", tags=["Sarkari Jobs"])
    app.include_router(internships.router, prefix=f"{API_PREFIX}/internships", tags=["Internships"])
    app.include_router(certifications.router, prefix=f"{API_PREFIX}/certifications", tags=["Certifications"])
    app.include_router(walking.router, prefix=f"{API_PREFIX}/walking", tags=["Walking"])
    app.include_router(subscriptions.router, prefix=f"{API_PREFIX}/subscriptions", tags=["Subscriptions"])
    app.include_router(admin.router, prefix=f"{API_PREFIX}/admin", tags=["Admin"])
    app.include_router(ai.router, prefix=f"{API_PREFIX}/ai", tags=["AI"])
    app.include_router(s3.router, prefix=f"{API_PREFIX}/s3", tags=["S3"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
