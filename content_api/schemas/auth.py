"""
Pydantic schemas for authentication endpoints.

These models define the request rule sets for register/login and the
response payloads. Field order matters: validation reports the first
failing field in declaration order.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from content_api.auth.passwords import MAX_PASSWORD_BYTES
from content_api.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """POST /api/auth/register request body."""
    name: str = Field(..., min_length=1, max_length=30, description="Display name")
    email: EmailStr = Field(..., description="Login email (unique)")
    password: str = Field(..., min_length=6, description="Plaintext password")
    confirm_password: str = Field(..., description="Must equal password")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                '"password" must not exceed {max_bytes} bytes',
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.confirm_password != self.password:
            raise PydanticCustomError("passwords_mismatch", "Passwords do not match")
        return self


class LoginRequest(CamelModel):
    """POST /api/auth/login request body."""
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=6, description="Plaintext password")


class PublicUser(CamelModel):
    """Profile fields safe to return to clients (never the password digest)."""
    id: str = Field(..., description="User UUID")
    email: str = Field(..., description="User email")
    name: str = Field(..., description="Display name")


class AuthData(CamelModel):
    """Payload of successful register/login responses."""
    token: str = Field(..., description="Bearer token, valid for one hour")
    user: PublicUser


class AuthMeData(CamelModel):
    """Payload of GET /api/auth/me."""
    user_id: str = Field(..., description="User UUID (from the token 'sub' claim)")
    email: Optional[str] = Field(None, description="Email claim, if present")
