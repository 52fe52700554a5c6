"""
Demand Compliance - Authentication Utilities
JWT bearer tokens and permission dependencies.

Identity and tenant isolation are owned upstream; this module only verifies
the bearer token and exposes the caller's role and organization.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from .config import JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_HOURS

# Bearer token security
security = HTTPBearer()

# Permission table per firm role
ROLE_PERMISSIONS: Dict[str, List[str]] = {
    "firm_admin": ["*"],
    "attorney": ["demands:*", "cases:*", "templates:manage", "plans:approve"],
    "paralegal": ["demands:create", "demands:view", "cases:view", "templates:view"],
    "debtor": ["cases:view:own"],
    "public_defender": ["cases:view:assigned"],
}


@dataclass
class Principal:
    """Authenticated caller, already scoped to one organization."""
    user_id: str
    organization_id: Optional[str]
    role: str


def has_permission(role: str, permission: str) -> bool:
    """Exact match, full wildcard, or category wildcard ('demands:*')."""
    granted = ROLE_PERMISSIONS.get(role, [])
    if "*" in granted or permission in granted:
        return True
    category = permission.split(":", 1)[0]
    return f"{category}:*" in granted


def create_access_token(user_id: str, organization_id: Optional[str], role: str) -> str:
    """Create a JWT access token with organization and role claims."""
    expire = datetime.now(timezone.utc) + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode = {
        "sub": user_id,
        "org_id": organization_id,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token. Expired or tampered tokens return None."""
    try:
        return jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Principal:
    """Dependency returning the authenticated caller."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise credentials_exception

    return Principal(user_id=user_id, organization_id=payload.get("org_id"), role=role)


def require_permission(permission: str):
    """Dependency factory: 403 unless the caller's role grants the permission."""

    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not has_permission(principal.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission}' required",
            )
        return principal

    return dependency
