"""Pydantic schemas for the auth service and admin security flow."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.query import BackendError


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(json_schema_extra={
        "example": {"email": "editor@example.com", "password": "StrongPass!234"}
    })


class SessionUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser


class AuthResult(BaseModel):
    """``{data, error}`` pair returned by the auth service."""

    data: Any = None
    error: Optional[BackendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str, code: Optional[str] = None) -> "AuthResult":
        return cls(error=BackendError(message=message, code=code))


class ChangePasswordStart(BaseModel):
    """Step 1: verify the current password and request a code."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    retype_password: str = Field(..., min_length=8)

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordStart":
        if self.new_password != self.retype_password:
            raise ValueError("Passwords do not match")
        return self


class ChangePasswordConfirm(BaseModel):
    """Step 2: exchange the emailed code and set the new password."""
    code: str = Field(..., min_length=4, max_length=12)
    new_password: str = Field(..., min_length=8)


class MessageResponse(BaseModel):
    message: str
