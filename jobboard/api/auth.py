"""Bearer-token admin authentication."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobboard.api.deps import get_resources
from jobboard.errors import AuthError
from jobboard.resources import Resources

bearer_scheme = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    resources: Resources = Depends(get_resources),
) -> dict:
    """Resolve ``Authorization: Bearer <token>`` to ``{email, role}``."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")
    return resources.admins.verify_token(credentials.credentials)
