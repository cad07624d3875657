# src/password_reset/schemas.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fields are optional on purpose: blank, missing or unusable values are
# reported by the service as a validation error (400) after normalization.


class _LenientBody(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalars(cls, v: Any) -> str | None:
        if isinstance(v, str):
            return v
        # Numbers arrive from clients that send codes as integers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None


class RequestResetSchema(_LenientBody):
    email: str | None = None


class VerifyOTPSchema(_LenientBody):
    email: str | None = None
    code: str | None = Field(None, description="The 6-digit code from the email.")


class ResetPasswordSchema(_LenientBody):
    reset_token: str | None = Field(None, alias="resetToken")
    new_password: str | None = Field(
        None, alias="newPassword", description="The new password for the account."
    )

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class RequestResetResponse(MessageResponse):
    expires_in_seconds: int


class ResetTokenResponse(BaseModel):
    reset_token: str = Field(..., alias="resetToken")

    model_config = ConfigDict(populate_by_name=True)
