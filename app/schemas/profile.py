"""Pydantic schemas for `Profile` domain objects."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALLOWED_ROLES = {"user", "editor", "admin"}


class ProfileBase(BaseModel):
	full_name: Optional[str] = Field(None, max_length=255)
	avatar_url: Optional[str] = Field(None, max_length=500)


class ProfileCreate(ProfileBase):
	id: str
	role: str = "user"

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: str) -> str:
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v


class ProfileUpdate(ProfileBase):
	pass


class ProfileResponse(ProfileBase):
	id: str
	role: str
	email: Optional[str] = None
	created_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
