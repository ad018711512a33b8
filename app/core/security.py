"""Credential hashing and bearer token verification."""
import logging
from typing import Optional

import bcrypt
import jwt
from jwt.exceptions import PyJWTError

from app.config import settings

logger = logging.getLogger(__name__)


def hash_secret(secret: str) -> str:
    return bcrypt.hashpw(secret.encode(), bcrypt.gensalt()).decode()


def verify_secret(secret: str, hash_: str) -> bool:
    return bcrypt.checkpw(secret.encode(), hash_.encode())


def decode_access_token(token: str) -> Optional[dict]:
    """Verify a bearer token and return its claims, or None when invalid."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except PyJWTError as e:
        logger.warning(f"Failed to decode JWT: {e}")
        return None


def administrator_id_from_claims(claims: dict) -> Optional[int]:
    """Read the administrator ID from ``sub`` (or ``nameid``).

    Returns None unless it is a positive integer or a string holding one.
    """
    raw = claims.get("sub") or claims.get("nameid")
    # bool is an int subclass and int() truncates floats
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        logger.warning(f"Token carries administrator ID of type {type(raw).__name__}")
        return None
    try:
        administrator_id = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Could not parse administrator ID from token: {raw!r}")
        return None
    if administrator_id <= 0:
        logger.warning(f"Token carries invalid administrator ID {administrator_id}")
        return None
    return administrator_id
