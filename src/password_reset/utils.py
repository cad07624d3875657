# src/password_reset/utils.py
import secrets
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from src.auth.config import auth_settings
from src.password_reset.config import password_reset_settings
from src.password_reset.exceptions import PasswordResetError, ResetErrorCode


def generate_otp() -> str:
    return f"{secrets.randbelow(1000000):06d}"


def hash_otp(code: str) -> str:
    salt = bcrypt.gensalt(rounds=password_reset_settings.OTP_HASH_ROUNDS)
    return bcrypt.hashpw(code.encode("utf-8"), salt).decode("utf-8")


def verify_otp(code: str, code_hash: str) -> bool:
    try:
        return bcrypt.checkpw(code.encode("utf-8"), code_hash.encode("utf-8"))
    except ValueError:
        return False


def create_reset_token(email: str) -> str:
    expire = datetime.now(UTC) + timedelta(
        minutes=password_reset_settings.RESET_TOKEN_EXPIRE_MINUTES
    )
    payload = {
        "email": email,
        "purpose": password_reset_settings.RESET_TOKEN_PURPOSE,
        "exp": expire,
    }
    return jwt.encode(
        payload, auth_settings.JWT_SECRET, algorithm=auth_settings.JWT_ALGORITHM
    )


def decode_reset_token(token: str) -> dict:
    """
    Decodes and checks a reset token, raising PasswordResetError when the
    signature is bad, the token expired, or it was issued for another purpose.
    """
    try:
        payload = jwt.decode(
            token, auth_settings.JWT_SECRET, algorithms=[auth_settings.JWT_ALGORITHM]
        )
    except jwt.InvalidTokenError:
        raise PasswordResetError(ResetErrorCode.INVALID_OR_EXPIRED_TOKEN) from None

    if payload.get("purpose") != password_reset_settings.RESET_TOKEN_PURPOSE:
        raise PasswordResetError(ResetErrorCode.INVALID_TOKEN_PURPOSE)
    return payload
