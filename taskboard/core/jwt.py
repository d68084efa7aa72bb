"""
JWT access token helpers.

Tokens carry the user id in ``sub`` and the role at issue time in ``role``.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from taskboard.core.config import settings
from taskboard.utils.time import utc_now


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token.
    
    Args:
        data: Claims to embed (must include ``sub``)
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_HOURS
        
    Returns:
        Encoded JWT string
    """
    to_encode = dict(data)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    now = utc_now()
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify an access token.
    
    Returns:
        The claims dict, or None if the token is malformed, tampered with or expired
    """
    if not token:
        return None
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
