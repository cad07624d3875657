# src/password_reset/exceptions.py
import logging
from contextlib import contextmanager
from enum import Enum

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ResetErrorCode(str, Enum):
    VALIDATION_ERROR = "validation_error"
    RATE_LIMITED = "rate_limited"
    CODE_EXPIRED = "code_expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    INVALID_CODE = "invalid_code"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    INVALID_TOKEN_PURPOSE = "invalid_token_purpose"
    ACCOUNT_NOT_FOUND = "account_not_found"
    SERVER_ERROR = "server_error"


STATUS_CODES: dict[ResetErrorCode, int] = {
    ResetErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ResetErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ResetErrorCode.CODE_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ResetErrorCode.TOO_MANY_ATTEMPTS: status.HTTP_429_TOO_MANY_REQUESTS,
    ResetErrorCode.INVALID_CODE: status.HTTP_400_BAD_REQUEST,
    ResetErrorCode.INVALID_OR_EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ResetErrorCode.INVALID_TOKEN_PURPOSE: status.HTTP_401_UNAUTHORIZED,
    ResetErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ResetErrorCode.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

DEFAULT_MESSAGES: dict[ResetErrorCode, str] = {
    ResetErrorCode.VALIDATION_ERROR: "Missing or invalid fields",
    ResetErrorCode.RATE_LIMITED: (
        "An OTP was already sent. Please wait before requesting a new code."
    ),
    ResetErrorCode.CODE_EXPIRED: "Code expired. Request a new one.",
    ResetErrorCode.TOO_MANY_ATTEMPTS: "Too many attempts. Request a new code.",
    ResetErrorCode.INVALID_CODE: "Invalid code",
    ResetErrorCode.INVALID_OR_EXPIRED_TOKEN: "Invalid or expired token",
    ResetErrorCode.INVALID_TOKEN_PURPOSE: "Invalid token purpose",
    ResetErrorCode.ACCOUNT_NOT_FOUND: "User not found",
    ResetErrorCode.SERVER_ERROR: "Something went wrong",
}


class PasswordResetError(Exception):
    def __init__(
        self,
        code: ResetErrorCode,
        message: str | None = None,
        retry_after: int | None = None,
    ):
        self.code = code
        self.message = message or DEFAULT_MESSAGES[code]
        self.retry_after = retry_after
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.code]


class EmailDeliveryError(Exception):
    pass


async def password_reset_exception_handler(
    request: Request, exc: PasswordResetError
) -> JSONResponse:
    content = {"message": exc.message, "code": exc.code.value}
    headers = None
    if exc.retry_after is not None:
        content["retryAfter"] = exc.retry_after
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@contextmanager
def unexpected_errors(operation: str):
    """Let domain errors through; hide everything else behind SERVER_ERROR."""
    try:
        yield
    except PasswordResetError:
        raise
    except Exception as exc:
        logger.exception("%s error", operation)
        raise PasswordResetError(ResetErrorCode.SERVER_ERROR) from exc
