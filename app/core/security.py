"""
JWT helpers for the authentication collaborator.

Token issuance belongs to the auth service; the social graph only needs to
verify the bearer token and read the caller id from its subject.
"""
from datetime import timedelta
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from app.core.config import settings
from app.utils.time_utils import utc_now


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Encode a signed access token; `sub` must carry the user id"""
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": utc_now() + expires_delta})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode an access token

    Raises:
        ValueError: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise ValueError(f"Invalid access token: {e}")

    if payload.get("sub") is None:
        raise ValueError("Access token has no subject")
    return payload
