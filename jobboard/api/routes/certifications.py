"""Certification endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, bulk_response, list_query, read_upload
from jobboard.api.schemas import CertificationListResponse, MessageResponse
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.get("", response_model=CertificationListResponse)
@limiter.limit(settings.rate_limit_public)
def list_certifications(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    category: str | None = None,
    resources: Resources = Depends(get_resources),
):
    result = resources.certifications.list(list_query(page, limit, q, category=category))
    return CertificationListResponse(certifications=result.items, pagination=result.pagination)


@router.get("/category/{category}", response_model=CertificationListResponse)
@limiter.limit(settings.rate_limit_public)
def list_certifications_by_category(
    request: Request,
    category: str,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    resources: Resources = Depends(get_resources),
):
    result = resources.certifications.list_by_category(category, list_query(page, limit, q))
    return CertificationListResponse(certifications=result.items, pagination=result.pagination)


@router.get("/{certification_id}")
@limiter.limit(settings.rate_limit_public)
def get_certification(request: Request, certification_id: str, resources: Resources = Depends(get_resources)):
    return resources.certifications.read(certification_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_sensitive)
def create_certification(
    request: Request,
    payload: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    certification = resources.certifications.create(payload)
    audit(resources, admin, "added", "certification", certification["id"])
    return certification


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_certifications(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Upload up to 1000 certifications from a CSV/XLSX file."""
    result = resources.certifications.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "certification", f"{result.uploaded} items")
    return bulk_response(result)


@router.put("/{certification_id}")
@limiter.limit(settings.rate_limit_sensitive)
def update_certification(
    request: Request,
    certification_id: str,
    patch: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Replace title, provider, category and link (all required)."""
    certification = resources.certifications.update(certification_id, patch)
    audit(resources, admin, "updated", "certification", certification_id)
    return certification


@router.delete("/{certification_id}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_certification(
    request: Request,
    certification_id: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    if resources.certifications.delete(certification_id):
        audit(resources, admin, "deleted", "certification", certification_id)
    return MessageResponse(message="Certification deleted successfully")
