# src/auth/schemas.py
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.auth.config import auth_settings

NAME_PATTERN = re.compile(r"^[A-Za-z\s'-]+$")
STRONG_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^\w\s]).{8,}$")


class UserCreate(BaseModel):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: EmailStr
    age: int = Field(..., ge=13, le=120)
    gender: Literal["male", "female"]
    password: str

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not 2 <= len(v) <= 50 or not NAME_PATTERN.match(v):
            raise ValueError(
                "must be 2-50 chars and only letters, spaces, hyphens, apostrophes"
            )
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if len(v) > 100:
                raise ValueError("Enter a valid email address")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not STRONG_PASSWORD_PATTERN.match(v):
            raise ValueError(
                "Password must be 8+ chars and include uppercase, lowercase, "
                "number, and special character."
            )
        return v


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserRead(BaseModel):
    id: int
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    gender: str
    age: int
    role: str

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class Token(BaseModel):
    token: str
    token_type: str = auth_settings.TOKEN_TYPE
    user: UserRead
