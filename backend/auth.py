"""Bearer token handling: issue and decode HS256 JWTs carrying the user's public id."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from locations_core.errors import Unauthenticated
from utils.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET

LOG = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    """Return a signed token whose "sub" claim is subject (a user public id)."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode({"sub": subject, "exp": expire}, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_caller_id(token: str) -> Optional[str]:
    """Return the "sub" claim of a valid token, or None if invalid/expired."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        LOG.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError:
        LOG.info("Rejected invalid token")
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None


def get_caller_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    """FastAPI dependency: caller's public user id from the Authorization header.

    Raises Unauthenticated for a missing or invalid token, before the request body is validated.
    """
    caller_id = decode_caller_id(credentials.credentials) if credentials is not None else None
    if caller_id is None:
        raise Unauthenticated()
    return caller_id
