"""Private job endpoints."""

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
def list_jobs(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    category: str | None = None,
    location: str | None = None,
    batch: str | None = Query(None, description='"Not Mentioned" matches jobs without a batch'),
    tags: str | None = None,
    role: str | None = None,
    resources: Resources = Depends(get_resources),
):
    """List active jobs, newest first."""
    query = list_query(page, limit, q, category=category, location=location, batch=batch, tags=tags, role=role)
    result = resources.jobs.list(query)
    return JobListResponse(jobs=result.items, pagination=result.pagination)


@router.get("/{job_id}")
@limiter.limit(settings.rate_limit_public)
def get_job(request: Request, job_id: str, resources: Resources = Depends(get_resources)):
    return resources.jobs.read(job_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_sensitive)
def create_job(
    request: Request,
    payload: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Create a job. ``jobId``, ``postedOn`` and ``status`` are set by the server."""
    job = resources.jobs.create(payload)
    audit(resources, admin, "added", "job", job["jobId"])
    return job


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_jobs(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    result = resources.jobs.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "job", f"{result.uploaded} items")
    return bulk_response(result)


@router.put("/{job_id}")
@limiter.limit(settings.rate_limit_sensitive)
def update_job(
    request: Request,
    job_id: str,
    patch: dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Update a job. Changing ``category`` moves it to the new partition."""
    job = resources.jobs.update(job_id, patch)
    audit(resources, admin, "updated", "job", job_id)
    return job


@router.delete("/{job_id}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_job(
    request: Request,
    job_id: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Delete a job. Deleting an unknown id also succeeds."""
    if resources.jobs.delete(job_id):
        audit(resources, admin, "deleted", "job", job_id)
        return MessageResponse(message="Job deleted successfully")
    return MessageResponse(message="Job deleted successfully (not found, already deleted)")
