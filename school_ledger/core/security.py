# school_ledger/core/security.py
"""Bearer token identity resolution."""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from .config import settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# Missing credentials are reported by us as 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    id: UUID
    role: Optional[str] = None


def create_access_token(subject: UUID, extra_claims: Optional[Dict[str, Any]] = None) -> str:
    """Sign a token for the given user id. Used by tooling and tests; issuance is owned elsewhere."""
    claims = {"sub": str(subject)}
    if extra_claims:
        claims.update(extra_claims)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid token")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Token has no subject")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise AuthenticationError("Token subject is not a valid user id")

    return CurrentUser(id=user_id, role=payload.get("role"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Resolve the caller identity from the Authorization header"""
    if credentials is None:
        raise AuthenticationError()
    return decode_access_token(credentials.credentials)
