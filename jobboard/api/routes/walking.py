"""Walk-in interview endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, bulk_response, list_query, read_upload
from jobboard.api.schemas import FilterOptionsResponse, MessageResponse, WalkingListResponse
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.get("", response_model=WalkingListResponse)
@limiter.limit(settings.rate_limit_public)
def list_walking(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    category: str | None = Query(None, description="Case-insensitive"),
    location: str | None = Query(None, description="Case-insensitive substring"),
    resources: Resources = Depends(get_resources),
):
    result = resources.walking.list(list_query(page, limit, q, category=category, location=location))
    return WalkingListResponse(walking=result.items, pagination=result.pagination)


@router.get("/filters", response_model=FilterOptionsResponse, response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_public)
def get_walking_filters(request: Request, resources: Resources = Depends(get_resources)):
    return resources.walking.filter_options()


@router.get("/category/{category}", response_model=WalkingListResponse)
@limiter.limit(settings.rate_limit_public)
def list_walking_by_category(
    request: Request,
    category: str,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    resources: Resources = Depends(get_resources),
):
    result = resources.walking.list_by_category(category, list_query(page, limit, q))
    return WalkingListResponse(walking=result.items, pagination=result.pagination)


@router.get("/{walking_id}")
@limiter.limit(settings.rate_limit_public)
def get_walking(request: Request, walking_id: str, resources: Resources = Depends(get_resources)):
    return resources.walking.read(walking_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_sensitive)
def create_walking(
    request: Request,
    payload: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    walking = resources.walking.create(payload)
    audit(resources, admin, "added", "walking", walking["id"])
    return walking


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_walking(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    result = resources.walking.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "walking", f"{result.uploaded} items")
    return bulk_response(result)


@router.put("/{walking_id}")
@limiter.limit(settings.rate_limit_sensitive)
def update_walking(
    request: Request,
    walking_id: str,
    patch: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    walking = resources.walking.update(walking_id, patch)
    audit(resources, admin, "updated", "walking", walking_id)
    return walking


@router.delete("/{walking_id}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_walking(
    request: Request,
    walking_id: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    if resources.walking.delete(walking_id):
        audit(resources, admin, "deleted", "walking", walking_id)
    return MessageResponse(message="Walking opportunity deleted successfully")
