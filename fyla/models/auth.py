"""Authentication DTOs."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from fyla.models.base import ApiModel


class UserRole(str, Enum):
    CLIENT = "Client"
    PROVIDER = "ServiceProvider"


class User(ApiModel):
    id: int
    role: UserRole
    full_name: str
    email: str
    phone_number: str = ""
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(ApiModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(ApiModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    confirm_password: str
    phone_number: str = ""
    role: UserRole = UserRole.CLIENT

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    def to_backend(self) -> Dict[str, Any]:
        """Registration body; the backend binds PascalCase keys on this endpoint."""
        return {
            "FullName": self.full_name,
            "Email": self.email,
            "Password": self.password,
            "ConfirmPassword": self.confirm_password,
            "PhoneNumber": self.phone_number,
            "Role": self.role.value,
        }


class AuthResponse(ApiModel):
    user: User
    token: str
    refresh_token: str
