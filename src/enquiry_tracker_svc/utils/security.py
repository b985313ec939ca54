from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from passlib.context import CryptContext
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from enquiry_tracker_svc import config

_logger = logging.getLogger(__name__)

# Module level CryptContext; bcrypt salts every hash
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password.

    Raises ValueError for invalid inputs. Returns True when verified, False
    on mismatch or on a malformed hash (logged with exc_info).
    """
    if not isinstance(plain_password, str) or not plain_password:
        raise ValueError("plain_password must be a non-empty string")
    if not isinstance(hashed_password, str) or not hashed_password:
        raise ValueError("hashed_password must be a non-empty string")

    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        _logger.error(e, exc_info=True)
        return False


def get_password_hash(password: str) -> str:
    """Return a salted hash for the provided password.

    Raises ValueError for invalid input.
    """
    if not isinstance(password, str) or not password:
        raise ValueError("password must be a non-empty string")

    return pwd_context.hash(password)


def create_access_token(data: Dict[str, object], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT with ``exp`` embedded.

    data must be a non-empty dict. Expiry defaults to
    ``config.ACCESS_TOKEN_EXPIRE_MINUTES`` from now.
    """
    if not isinstance(data, dict) or not data:
        raise ValueError("data must be a non-empty dict")

    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, object]]:
    """Decode a JWT and return the payload dict or None on failure/expiration."""
    if not isinstance(token, str) or not token:
        return None

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        return dict(payload)
    except ExpiredSignatureError:
        _logger.info("Rejected expired access token")
        return None
    except JWTError as e:
        _logger.warning("Rejected invalid access token: %s", e)
        return None


def using_default_secret() -> bool:
    return config.SECRET_KEY == config.DEFAULT_SECRET_KEY
