"""Government job endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, bulk_response, list_query, read_upload
from jobboard.api.schemas import JobListResponse, MessageResponse
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.get("", response_model=JobListResponse)
@limiter.limit(settings.rate_limit_public)
def list_sarkari_jobs(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    organization: str | None = None,
    resources: Resources = Depends(get_resources),
):
    result = resources.sarkari_jobs.list(list_query(page, limit, q, organization=organization))
    return JobListResponse(jobs=result.items, pagination=result.pagination)


@router.get("/results")
@limiter.limit(settings.rate_limit_public)
def list_sarkari_results(request: Request, resources: Resources = Depends(get_resources)) -> list[dict[str, Any]]:
    """Listings whose results have been published."""
    return resources.sarkari_jobs.results()


@router.get("/{job_id}")
@limiter.limit(settings.rate_limit_public)
def get_sarkari_job(request: Request, job_id: str, resources: Resources = Depends(get_resources)):
    return resources.sarkari_jobs.read(job_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_sensitive)
def create_sarkari_job(
    request: Request,
    payload: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    job = resources.sarkari_jobs.create(payload)
    audit(resources, admin, "added", "sarkari-job", job["jobId"])
    return job


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_sarkari_jobs(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    result = resources.sarkari_jobs.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "sarkari-job", f"{result.uploaded} items")
    return bulk_response(result)


@router.put("/{job_id}")
@limiter.limit(settings.rate_limit_sensitive)
def update_sarkari_job(
    request: Request,
    job_id: str,
    patch: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Update fields of a government job; ``organization`` and ``jobId`` are fixed."""
    job = resources.sarkari_jobs.update(job_id, patch)
    audit(resources, admin, "updated", "sarkari-job", job_id)
    return job


@router.delete("/{job_id}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_sarkari_job(
    request: Request,
    job_id: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    if resources.sarkari_jobs.delete(job_id):
        audit(resources, admin, "deleted", "sarkari-job", job_id)
    return MessageResponse(message="Sarkari job deleted successfully")
