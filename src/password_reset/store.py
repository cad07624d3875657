# src/password_reset/store.py
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.password_reset.config import password_reset_settings
from src.password_reset.models import OtpChallenge


def _as_utc(value: datetime) -> datetime:
    # Some backends (SQLite) hand timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def challenge_age(created_at: datetime, now: datetime) -> float:
    return (now - _as_utc(created_at)).total_seconds()


def seconds_left(
    created_at: datetime,
    now: datetime,
    ttl_seconds: int = password_reset_settings.OTP_TTL_SECONDS,
) -> int:
    return max(0, ttl_seconds - int(challenge_age(created_at, now)))


def is_expired(challenge: OtpChallenge, now: datetime) -> bool:
    return (
        challenge_age(challenge.created_at, now)
        >= password_reset_settings.OTP_TTL_SECONDS
    )


async def get_active_challenge(
    db: AsyncSession, email: str, now: datetime
) -> OtpChallenge | None:
    result = await db.execute(
        select(OtpChallenge).where(OtpChallenge.email == email)
    )
    challenge = result.scalars().first()
    if challenge is None:
        return None

    if is_expired(challenge, now):
        await delete_challenges(db, email)
        return None
    return challenge


async def delete_challenges(db: AsyncSession, email: str) -> None:
    await db.execute(delete(OtpChallenge).where(OtpChallenge.email == email))
    await db.commit()


async def replace_challenge(
    db: AsyncSession, email: str, code_hash: str, now: datetime
) -> OtpChallenge:
    """Supersede any previous challenge for the email in one transaction.

    Raises IntegrityError if a concurrent request inserted first.
    """
    await db.execute(delete(OtpChallenge).where(OtpChallenge.email == email))
    challenge = OtpChallenge(email=email, code_hash=code_hash, created_at=now, attempts=0)
    db.add(challenge)
    await db.commit()
    return challenge


async def register_failed_attempt(db: AsyncSession, email: str) -> None:
    await db.execute(
        update(OtpChallenge)
        .where(OtpChallenge.email == email)
        .values(attempts=OtpChallenge.attempts + 1)
    )
    await db.commit()


async def cleanup_expired_challenges(db: AsyncSession, now: datetime) -> int:
    cutoff = now - timedelta(seconds=password_reset_settings.OTP_TTL_SECONDS)
    result = await db.execute(
        delete(OtpChallenge)
        .where(OtpChallenge.created_at <= cutoff)
        .execution_options(synchronize_session="fetch")
    )
    deleted_count = result.rowcount
    if deleted_count > 0:
        await db.commit()
    return deleted_count
