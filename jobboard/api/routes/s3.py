"""Pre-signed CV upload URLs."""

from fastapi import APIRouter, Depends, Request

from jobboard.api.deps import get_blob_store
from jobboard.api.limiter import limiter
from jobboard.api.schemas import PresignedUrlResponse
from jobboard.config import settings
from jobboard.tools.blob_store import PDF_CONTENT_TYPE, BlobStore

router = APIRouter()


@router.get("/pre-signed-url", response_model=PresignedUrlResponse)
@limiter.limit(settings.rate_limit_sensitive)
def get_pre_signed_url(request: Request, fileType: str = PDF_CONTENT_TYPE, blobs: BlobStore = Depends(get_blob_store)):
    """Issue a short-lived PUT URL for uploading a CV straight to the bucket."""
    return blobs.presign_upload(fileType)
