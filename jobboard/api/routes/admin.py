"""Admin login, account management and dashboard endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, list_query
from jobboard.api.schemas import (
    ActivityListResponse,
    AdminProfile,
    CreateAdminRequest,
    CreateAdminResponse,
    LoginRequest,
    LoginResponse,
    StatsResponse,
)
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.rate_limit_sensitive)
def login(request: Request, data: LoginRequest, resources: Resources = Depends(get_resources)):
    """Exchange email and password for a bearer token."""
    return resources.admins.login(data.email, data.password)


@router.post("/admins", status_code=201, response_model=CreateAdminResponse)
@limiter.limit(settings.rate_limit_sensitive)
def create_admin(
    request: Request,
    data: CreateAdminRequest,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    created = resources.admins.create_admin(data.email, data.password, data.role)
    audit(resources, admin, "added", "admin", created["email"])
    return CreateAdminResponse(message="Admin created successfully", admin=AdminProfile(**created))


@router.get("/stats", response_model=StatsResponse)
@limiter.limit(settings.rate_limit_sensitive)
def get_stats(request: Request, admin: dict = Depends(require_admin), resources: Resources = Depends(get_resources)):
    """Totals and active counts per resource."""
    return resources.stats()


@router.get("/recent-activity", response_model=ActivityListResponse)
@limiter.limit(settings.rate_limit_sensitive)
def get_recent_activity(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    adminEmail: str | None = None,
    action: str | None = None,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Admin mutations, newest first (20 per page by default)."""
    result = resources.activity.recent(list_query(page, limit, q, adminEmail=adminEmail, action=action))
    return ActivityListResponse(activities=result.items, pagination=result.pagination)
