# ============================================================================
# FILE: massage_booking/api/dependencies.py
# Identity dependencies. Tokens are issued by the identity provider; this
# service only verifies them and reads the caller's id and role.
# ============================================================================
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from pydantic import BaseModel

from massage_booking.config.settings import get_settings
from massage_booking.core.exceptions import Forbidden, Unauthorized

# ============================================================================
# Security Schemes
# ============================================================================

jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Enter your JWT access token",
    auto_error=False,
)


class Identity(BaseModel):
    """The authenticated caller as described by the token claims"""
    user_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == get_settings().ADMIN_ROLE


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary with claims (should include 'sub' and optionally 'role')
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "type": "access"
    })

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def verify_access_token(token: str) -> dict:
    """
    Verify and decode a JWT access token.

    Raises:
        Unauthorized: If token is invalid, expired or not an access token
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise Unauthorized(f"Could not validate credentials: {str(e)}")

    if payload.get("type") != "access":
        raise Unauthorized("Invalid token type")

    return payload


def _identity_from_token(token: str) -> Identity:
    payload = verify_access_token(token)

    user_id: Optional[str] = payload.get("sub")
    if not user_id:
        raise Unauthorized("Could not validate credentials")

    return Identity(user_id=str(user_id), role=payload.get("role"))


# ============================================================================
# Authentication Dependencies
# ============================================================================

async def get_current_identity(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(jwt_security)
) -> Identity:
    """
    Dependency to get the caller's identity from the bearer token.

    Raises:
        Unauthorized: If no token is sent or it does not verify
    """
    if not credentials:
        raise Unauthorized("Not authenticated")

    return _identity_from_token(credentials.credentials)


async def optional_identity(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(jwt_security)
) -> Optional[Identity]:
    """
    Identity if a token is sent, None for anonymous callers.
    A token that is sent but does not verify is still rejected.
    """
    if not credentials:
        return None

    return _identity_from_token(credentials.credentials)


async def require_admin(
        identity: Identity = Depends(get_current_identity)
) -> Identity:
    """
    Dependency that requires the admin role.

    Usage in routes:
        @router.get("/admin/appointments")
        async def list_appointments(admin: Identity = Depends(require_admin)):
            pass
    """
    if not identity.is_admin:
        raise Forbidden("Admin access required")

    return identity
