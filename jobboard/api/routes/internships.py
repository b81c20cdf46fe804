"""Internship endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, bulk_response, list_query, read_upload
from jobboard.api.schemas import FilterOptionsResponse, InternshipListResponse, MessageResponse
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.get("", response_model=InternshipListResponse)
@limiter.limit(settings.rate_limit_public)
def list_internships(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    category: str | None = None,
    location: str | None = None,
    batch: str | None = None,
    resources: Resources = Depends(get_resources),
):
    query = list_query(page, limit, q, category=category, location=location, batch=batch)
    result = resources.internships.list(query)
    return InternshipListResponse(internships=result.items, pagination=result.pagination)


@router.get("/filters", response_model=FilterOptionsResponse)
@limiter.limit(settings.rate_limit_public)
def get_internship_filters(request: Request, resources: Resources = Depends(get_resources)):
    """Distinct categories, locations and batches for filter dropdowns."""
    return resources.internships.filter_options()


@router.get("/category/{category}", response_model=InternshipListResponse)
@limiter.limit(settings.rate_limit_public)
def list_internships_by_category(
    request: Request,
    category: str,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    resources: Resources = Depends(get_resources),
):
    result = resources.internships.list_by_category(category, list_query(page, limit, q))
    return InternshipListResponse(internships=result.items, pagination=result.pagination)


@router.get("/{internship_id}")
@limiter.limit(settings.rate_limit_public)
def get_internship(request: Request, internship_id: str, resources: Resources = Depends(get_resources)):
    return resources.internships.read(internship_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_sensitive)
def create_internship(
    request: Request,
    payload: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Create an internship; the company logo is looked up once and stored."""
    internship = resources.internships.create(payload)
    audit(resources, admin, "added", "internship", internship["id"])
    return internship


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_internships(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    result = resources.internships.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "internship", f"{result.uploaded} items")
    return bulk_response(result)


@router.put("/{internship_id}")
@limiter.limit(settings.rate_limit_sensitive)
def update_internship(
    request: Request,
    internship_id: str,
    patch: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    internship = resources.internships.update(internship_id, patch)
    audit(resources, admin, "updated", "internship", internship_id)
    return internship


@router.delete("/{internship_id}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_internship(
    request: Request,
    internship_id: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    if resources.internships.delete(internship_id):
        audit(resources, admin, "deleted", "internship", internship_id)
    return MessageResponse(message="Internship deleted successfully")
