"""Pydantic schemas for the auth endpoints."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.auth.passwords import MAX_PASSWORD_BYTES


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    email: EmailStr
    mobile_number: Optional[str] = Field(None, max_length=20)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.")
        return value


class RegisterResponse(BaseModel):
    message: str
    id: int
