"""Newsletter subscription endpoints.

Subscribing is public; reading and removing subscriptions is admin-only.
"""

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from jobboard.api.auth import require_admin
from jobboard.api.deps import get_resources
from jobboard.api.limiter import limiter
from jobboard.api.routes.common import audit, bulk_response, list_query, read_upload
from jobboard.api.schemas import MessageResponse, SubscribeRequest, SubscribeResponse, SubscriptionListResponse
from jobboard.config import settings
from jobboard.resources import Resources

router = APIRouter()


@router.post("", status_code=201, response_model=SubscribeResponse)
@limiter.limit(settings.rate_limit_public)
def subscribe(request: Request, data: SubscribeRequest, resources: Resources = Depends(get_resources)):
    """Subscribe an email to one or more categories."""
    result = resources.subscriptions.subscribe(data.email, data.categories)
    return SubscribeResponse(message="Subscription successful", email=result["email"], categories=result["categories"])


@router.get("", response_model=SubscriptionListResponse)
@limiter.limit(settings.rate_limit_sensitive)
def list_subscriptions(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    q: str | None = None,
    category: str | None = None,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    result = resources.subscriptions.list(list_query(page, limit, q, category=category))
    return SubscriptionListResponse(subscriptions=result.items, pagination=result.pagination)


@router.get("/{email}")
@limiter.limit(settings.rate_limit_sensitive)
def get_subscription(
    request: Request,
    email: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    return resources.subscriptions.get(email)


@router.post("/bulk-upload")
@limiter.limit(settings.rate_limit_sensitive)
def bulk_upload_subscriptions(
    request: Request,
    file: UploadFile | None = File(None),
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Upload ``email,category`` rows."""
    result = resources.subscriptions.bulk_upload(read_upload(file))
    audit(resources, admin, "bulk_uploaded", "subscription", f"{result.uploaded} items")
    return bulk_response(result)


@router.delete("/{email}", response_model=MessageResponse)
@limiter.limit(settings.rate_limit_sensitive)
def delete_subscription(
    request: Request,
    email: str,
    admin: dict = Depends(require_admin),
    resources: Resources = Depends(get_resources),
):
    """Remove every category subscription of ``email``."""
    if resources.subscriptions.delete(email):
        audit(resources, admin, "deleted", "subscription", email)
    return MessageResponse(message="Subscription deleted successfully")
