# src/password_reset/service.py
import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.service import get_user_by_email
from src.auth.utils import hash_password, mask_email, normalize_email
from src.password_reset import store
from src.password_reset.config import password_reset_settings
from src.password_reset.exceptions import PasswordResetError, ResetErrorCode
from src.password_reset.mailer import send_otp_email
from src.password_reset.utils import (
    create_reset_token,
    decode_reset_token,
    generate_otp,
    hash_otp,
    verify_otp,
)

logger = logging.getLogger(__name__)

GENERIC_REQUEST_MESSAGE = (
    "If the email exists, a verification code was sent. Please check your inbox."
)


async def request_password_reset(email: str | None, db: AsyncSession) -> dict:
    email = normalize_email(email)
    if not email:
        raise PasswordResetError(ResetErrorCode.VALIDATION_ERROR, "Email is required")

    now = datetime.now(UTC)
    await store.cleanup_expired_challenges(db, now)

    user = await get_user_by_email(email, db)

    # Cooldown is keyed on the email alone, before the account branch
    existing = await store.get_active_challenge(db, email, now)
    if existing is not None:
        remaining = store.seconds_left(existing.created_at, now)
        if remaining > 0:
            logger.info("Reset request for %s rate limited (%ss left)", mask_email(email), remaining)
            raise PasswordResetError(ResetErrorCode.RATE_LIMITED, retry_after=remaining)

    if user:
        code = generate_otp()
        try:
            await store.replace_challenge(db, email, hash_otp(code), now)
        except IntegrityError:
            await db.rollback()
            logger.info("Concurrent reset request for %s lost the insert race", mask_email(email))
            raise PasswordResetError(
                ResetErrorCode.RATE_LIMITED,
                retry_after=password_reset_settings.OTP_TTL_SECONDS,
            ) from None

        logger.info("Issued password reset challenge for user id=%s", user.id)
        await send_otp_email(email, code)

    return {
        "message": GENERIC_REQUEST_MESSAGE,
        "expires_in_seconds": password_reset_settings.OTP_TTL_SECONDS,
    }


async def verify_otp_code(email: str | None, code: str | None, db: AsyncSession) -> dict:
    email = normalize_email(email)
    code = str(code or "").strip()
    if not email or not code:
        raise PasswordResetError(
            ResetErrorCode.VALIDATION_ERROR, "Email and code are required"
        )

    challenge = await store.get_active_challenge(db, email, datetime.now(UTC))
    if challenge is None:
        raise PasswordResetError(ResetErrorCode.CODE_EXPIRED)

    if challenge.attempts >= password_reset_settings.OTP_MAX_ATTEMPTS:
        await store.delete_challenges(db, email)
        logger.warning("Attempt ceiling reached for %s, challenge invalidated", mask_email(email))
        raise PasswordResetError(ResetErrorCode.TOO_MANY_ATTEMPTS)

    if not verify_otp(code, challenge.code_hash):
        await store.register_failed_attempt(db, email)
        logger.info(
            "Invalid reset code for %s (attempt %s of %s)",
            mask_email(email),
            challenge.attempts + 1,
            password_reset_settings.OTP_MAX_ATTEMPTS,
        )
        raise PasswordResetError(ResetErrorCode.INVALID_CODE)

    # Single use: the challenge goes away before the token leaves
    await store.delete_challenges(db, email)
    logger.info("Reset code verified for %s", mask_email(email))
    return {"resetToken": create_reset_token(email)}


async def reset_password(
    reset_token: str | None, new_password: str | None, db: AsyncSession
) -> dict:
    if not reset_token or not new_password:
        raise PasswordResetError(
            ResetErrorCode.VALIDATION_ERROR, "Token and new password are required"
        )

    try:
        payload = decode_reset_token(reset_token)
    except PasswordResetError as exc:
        logger.info("Rejected reset token: %s", exc.code.value)
        raise

    email = normalize_email(payload.get("email"))
    user = await get_user_by_email(email, db) if email else None
    if not user:
        raise PasswordResetError(ResetErrorCode.ACCOUNT_NOT_FOUND)

    user.password = hash_password(str(new_password))
    await db.commit()

    logger.info("Password reset for user id=%s", user.id)
    return {"message": "Password reset successful"}
