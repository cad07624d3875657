# src/auth/utils.py
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from src.auth.config import auth_settings

# bcrypt input limit; longer secrets are cut here, as bcryptjs does
BCRYPT_MAX_BYTES = 72


def normalize_email(email: str | None) -> str:
    return str(email or "").strip().lower()


def mask_email(email: str) -> str:
    """a***@x.com style address for log lines."""
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=auth_settings.PASSWORD_HASH_ROUNDS)
    hashed_bytes = bcrypt.hashpw(pwd_bytes, salt)
    return hashed_bytes.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    hashed_password_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(password_bytes, hashed_password_bytes)
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(UTC) + timedelta(
        minutes=auth_settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode, auth_settings.JWT_SECRET, algorithm=auth_settings.JWT_ALGORITHM
    )
