"""
Admin accounts, login and bearer tokens.

Passwords are stored as ``salt$hash`` (PBKDF2-SHA256). Tokens are HS256 JWTs
carrying the admin's email and role.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import UTC, datetime, timedelta

import jwt

from jobboard.config import settings
from jobboard.db import DocumentStore, KeySchema
from jobboard.errors import AuthError, ConflictError, ValidationError
from jobboard.utils.text import now_iso

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 190_000
JWT_ALGORITHM = "HS256"
DEFAULT_ROLE = "admin"
SUPERADMIN_ROLE = "superadmin"


def hash_password(password: str, salt: str | None = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = (stored or "").partition("$")
    if not salt or not expected:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


class AdminAccounts:
    """Admin table access plus token issuing and verification."""

    def __init__(
        self,
        store: DocumentStore,
        table: str,
        secret: str | None = None,
        expires_minutes: int | None = None,
    ):
        self.store = store
        self.table = table
        store.define_table(table, KeySchema("email"))
        self.secret = secret or settings.jwt_secret
        if not self.secret:
            logger.warning("JWT_SECRET not set, using a per-process secret (tokens will not survive restarts)")
            self.secret = secrets.token_urlsafe(32)
        self.expires_minutes = expires_minutes or settings.jwt_expires_minutes

    def issue_token(self, admin: dict) -> str:
        payload = {
            "email": admin["email"],
            "role": admin.get("role", DEFAULT_ROLE),
            "exp": datetime.now(UTC) + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> dict:
        """Decode a bearer token into ``{email, role}``.

        Raises:
            AuthError: expired, malformed or wrongly signed token
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthError("Token expired") from None
        except jwt.PyJWTError:
            raise AuthError("Invalid token") from None
        if not claims.get("email"):
            raise AuthError("Invalid token")
        return {"email": claims["email"], "role": claims.get("role", DEFAULT_ROLE)}

    def login(self, email: str | None, password: str | None) -> dict:
        if not email or not password:
            raise ValidationError("Email and password are required")
        admin = self.store.get(self.table, {"email": email})
        if admin is None or not verify_password(password, admin.get("password", "")):
            logger.info(f"Failed admin login for {email}")
            raise AuthError("Invalid credentials")
        profile = {"email": admin["email"], "role": admin.get("role", DEFAULT_ROLE)}
        return {"message": "Login successful", "token": self.issue_token(profile), "admin": profile}

    def create_admin(self, email: str | None, password: str | None, role: str | None) -> dict:
        if not email or not password or not role:
            raise ValidationError("Email, password, and role are required")
        if self.store.get(self.table, {"email": email}) is not None:
            raise ConflictError("Admin with this email already exists")
        self.store.put(
            self.table,
            {"email": email, "password": hash_password(password), "role": role, "createdAt": now_iso()},
        )
        logger.info(f"Created admin {email} with role {role}")
        return {"email": email, "role": role}

    def ensure_default_admin(self, email: str | None = None, password: str | None = None) -> bool:
        """Create the configured superadmin if it does not exist yet."""
        email = email or settings.admin_email
        password = password or settings.admin_password
        if not email or not password:
            logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping default admin")
            return False
        if self.store.get(self.table, {"email": email}) is not None:
            return False
        self.create_admin(email, password, SUPERADMIN_ROLE)
        return True
