# src/auth/service.py
import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.config import auth_settings
from src.auth.models import User
from src.auth.schemas import LoginRequest, Token, UserCreate, UserRead
from src.auth.utils import (
    create_access_token,
    hash_password,
    normalize_email,
    verify_password,
)
from src.exception import ServerErrorException

logger = logging.getLogger(__name__)


async def get_user_by_email(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def register_user(user: UserCreate, db: AsyncSession, role: str = "user") -> User:
    if await get_user_by_email(user.email, db):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        )

    db_user = User(
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        age=user.age,
        gender=user.gender,
        password=hash_password(user.password),
        role=role,
    )
    db.add(db_user)
    try:
        await db.commit()
        await db.refresh(db_user)
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        ) from None
    except Exception:
        await db.rollback()
        logger.exception("Registration failed for %s", user.email)
        raise ServerErrorException("Server error. Please try again.") from None

    logger.info("Registered user id=%s role=%s", db_user.id, role)
    return db_user


async def login_user(credentials: LoginRequest, db: AsyncSession) -> Token:
    email = normalize_email(credentials.email)
    if not email or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required.",
        )

    user = await get_user_by_email(email, db)
    if not user or not verify_password(credentials.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials."
        )

    token = create_access_token({"id": user.id, "email": user.email, "role": user.role})
    return Token(
        token=token,
        token_type=auth_settings.TOKEN_TYPE,
        user=UserRead.model_validate(user),
    )
