"""Core module exports."""

from .security import (
    create_access_token,
    create_reset_token,
    decode_token,
    generate_reset_code,
    get_password_hash,
    verify_password,
    ALGORITHM,
    ACCESS_TOKEN_EXPIRE_DAYS,
)

__all__ = [
    "create_access_token",
    "create_reset_token",
    "decode_token",
    "generate_reset_code",
    "get_password_hash",
    "verify_password",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_DAYS",
]
