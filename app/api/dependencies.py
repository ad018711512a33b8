"""Shared dependencies for API endpoints."""
from typing import Optional
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import administrator_id_from_claims, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_admin_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """Resolve the calling administrator from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or carries no usable ID

    Returns:
        int: Administrator ID from the token
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid token")

    administrator_id = administrator_id_from_claims(claims)
    if administrator_id is None:
        raise _unauthorized("Invalid token subject")

    return administrator_id
