"""Security utilities for session tokens, password hashing and reset codes."""

import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings


# Password hashing context - PBKDF2 (primary), bcrypt hashes still verify
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

# JWT settings
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = settings.ACCESS_TOKEN_EXPIRE_DAYS
RESET_TOKEN_EXPIRE_MINUTES = 10

SESSION_PURPOSE = "session"
RESET_PURPOSE = "password_reset"


def get_password_hash(password: str) -> str:
    """Hash a password (also used for reset codes)."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against a hashed password."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Return False if the hash scheme is unsupported
        return False


def generate_reset_code(length: int = 6) -> str:
    """Numeric one-time code sent by email."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    purpose: str = SESSION_PURPOSE,
) -> str:
    """Create a JWT.

    Args:
        data: Dictionary containing token claims (e.g., {'sub': 'user_id'})
        expires_delta: Custom expiration time. If None, uses ACCESS_TOKEN_EXPIRE_DAYS
        purpose: ``session`` for access tokens, ``password_reset`` for reset tokens

    Returns:
        Encoded JWT token; its ``jti`` claim identifies the session row

    Raises:
        ValueError: If SECRET_KEY is not configured
    """
    if not settings.SECRET_KEY:
        raise ValueError("SECRET_KEY environment variable is not set")

    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode.setdefault("jti", str(uuid.uuid4()))
    to_encode.update({"exp": expire, "purpose": purpose})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_reset_token(user_id: str) -> str:
    return create_access_token(
        {"sub": user_id},
        expires_delta=timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES),
        purpose=RESET_PURPOSE,
    )


def decode_token(token: str, purpose: str = SESSION_PURPOSE) -> Dict[str, Any]:
    """Decode and verify a JWT token.

    Raises:
        HTTPException: If token is invalid, expired or issued for another purpose
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    if payload.get("purpose") != purpose:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload

