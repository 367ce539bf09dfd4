"""Security utilities: JWT, roles, RBAC."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from company_review.config import settings
from company_review.core.exceptions import AuthorizationError

# HTTPBearer for simple token authentication in Swagger (just paste the access token)
security = HTTPBearer()


class Role(str, Enum):
    """User roles issued by the account service."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EMPLOYER = "EMPLOYER"
    STUDENT = "STUDENT"
    PROFESSOR = "PROFESSOR"
    ALUMNI = "ALUMNI"
    OTHER = "OTHER"


# Permission definitions (only SUPER_ADMIN and ADMIN may review companies)
ROLE_PERMISSIONS = {
    Role.SUPER_ADMIN: ["*"],  # All permissions
    Role.ADMIN: [
        "companies:*",
        "documents:read",
    ],
    Role.EMPLOYER: [
        "company:read",
        "company:update",
        "documents:upload",
    ],
    Role.STUDENT: [],
    Role.PROFESSOR: [],
    Role.ALUMNI: [],
    Role.OTHER: [],
}


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def coerce_role(role: Union[Role, str, None]) -> Role:
    """Turn a role claim into a Role, rejecting anything unknown."""
    if isinstance(role, Role):
        return role
    try:
        return Role(str(role).upper())
    except ValueError:
        raise AuthorizationError(f"Unknown role: {role}", role=role)


def check_permission(user_role: Role, permission: str) -> bool:
    """Check if a role has a specific permission."""
    permissions = ROLE_PERMISSIONS.get(user_role, [])

    # Wildcard permission
    if "*" in permissions:
        return True

    # Exact match
    if permission in permissions:
        return True

    # Resource wildcard (e.g., "companies:*" matches "companies:verify")
    resource = permission.split(":")[0]
    if f"{resource}:*" in permissions:
        return True

    return False


def authorize(role: Union[Role, str, None], permission: str) -> Role:
    """
    Capability check at the boundary of every subsystem entry point.

    Raises:
        AuthorizationError: if the role is unknown or lacks the permission
    """
    user_role = coerce_role(role)
    if not check_permission(user_role, permission):
        raise AuthorizationError(
            f"Permission denied: {permission}",
            role=user_role.value,
            permission=permission,
        )
    return user_role


async def get_current_role(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Role:
    """Get the caller's role from the Bearer token."""
    payload = decode_token(credentials.credentials)

    if payload.get("sub") is None or payload.get("role") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    try:
        return Role(str(payload["role"]).upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Unknown role: {payload['role']}",
        )
