"""
Request dependencies for bearer-token authentication and role checks.
"""
from typing import Callable, Optional
import logging

import jwt
from fastapi import Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from .auth import decode_access_token
from .models import Role
from .schemas import TokenClaims

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> TokenClaims:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied. No token provided.")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied. Invalid token format.")
    try:
        data = decode_access_token(token)
        claims = TokenClaims(user_id=data["sub"], email=data.get("email", ""), role=data.get("role"))
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired") from exc
    except (jwt.InvalidTokenError, ValidationError) as exc:
        logger.info("Rejected token on %s: %s", request.url.path, exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    request.state.user = claims
    return claims


def require_role(*allowed_roles: str) -> Callable[..., TokenClaims]:
    """
    Build a dependency that only lets through users whose role is in allowed_roles.

    Usage: Depends(require_role("admin", "moderator"))
    """
    allowed = [Role(role) for role in allowed_roles]

    def check_role(user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if user.role not in allowed:
            logger.info("Role %s denied, requires %s", user.role.value, allowed_roles)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Requires one of the following roles: {', '.join(allowed_roles)}",
            )
        return user

    return check_role


admin_only = require_role("admin")
