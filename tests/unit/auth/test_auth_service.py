# tests/unit/auth/test_auth_service.py
from unittest.mock import AsyncMock

import jwt
import pytest
import pytest_asyncio
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.config import auth_settings
from src.auth.models import User
from src.auth.schemas import LoginRequest, Token, UserCreate
from src.auth.service import get_user_by_email, login_user, register_user
from src.auth.utils import hash_password


def _user_create(email: str = "new@test.com") -> UserCreate:
    return UserCreate(
        firstName="New",
        lastName="User",
        email=email,
        age=30,
        gender="male",
        password="Password123!",
    )


# --- Test ID: UTC-01 ---

@pytest.mark.asyncio
async def test_register_user_success(db_session: AsyncSession):
    """
    UTC-01-TC-01: Register a new user with valid data.
    """
    user = await register_user(_user_create(), db_session)

    assert user.id is not None
    assert user.email == "new@test.com"
    assert user.role == "user"
    assert user.password != "Password123!"


@pytest.mark.asyncio
async def test_register_user_duplicate_email(db_session: AsyncSession):
    """
    UTC-01-TC-02: Test registration with an email that already exists.
    """
    await register_user(_user_create("existing@test.com"), db_session)

    with pytest.raises(HTTPException) as exc_info:
        await register_user(_user_create("existing@test.com"), db_session)

    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "Email is already registered."


@pytest.mark.asyncio
async def test_register_user_unexpected_db_error(db_session: AsyncSession):
    """
    UTC-01-TC-03: An unexpected database error occurs during commit.
    """
    db_session.commit = AsyncMock(side_effect=Exception("DB connection lost"))
    db_session.rollback = AsyncMock()

    with pytest.raises(HTTPException) as exc_info:
        await register_user(_user_create("error@test.com"), db_session)

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Server error. Please try again."
    db_session.rollback.assert_awaited_once()


# --- Test ID: UTC-02 ---

@pytest_asyncio.fixture
async def existing_user_for_login(db_session: AsyncSession):
    """Prerequisite: A user exists for login tests."""
    user = User(
        first_name="Login",
        last_name="User",
        email="user@test.com",
        age=25,
        gender="female",
        password=hash_password("correct_password"),
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_login_user_success(db_session: AsyncSession, existing_user_for_login):
    """
    UTC-02-TC-01: Test successful login with the correct email and password.
    """
    token = await login_user(
        LoginRequest(email=" User@Test.com ", password="correct_password"), db_session
    )
    assert isinstance(token, Token)
    assert token.token_type == "bearer"
    assert token.user.email == "user@test.com"

    payload = jwt.decode(
        token.token, auth_settings.JWT_SECRET, algorithms=[auth_settings.JWT_ALGORITHM]
    )
    assert payload["id"] == existing_user_for_login.id
    assert payload["role"] == "user"


@pytest.mark.asyncio
async def test_login_user_wrong_password(db_session: AsyncSession, existing_user_for_login):
    """
    UTC-02-TC-02: Test login attempt with a wrong password.
    """
    with pytest.raises(HTTPException) as exc_info:
        await login_user(
            LoginRequest(email="user@test.com", password="wrong_password"), db_session
        )
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid credentials."


@pytest.mark.asyncio
async def test_login_user_nonexistent_email(db_session: AsyncSession):
    """
    UTC-02-TC-03: Test login attempt with a non-existent email.
    """
    with pytest.raises(HTTPException) as exc_info:
        await login_user(
            LoginRequest(email="nouser@test.com", password="any_password"), db_session
        )
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid credentials."


@pytest.mark.asyncio
async def test_login_user_missing_fields(db_session: AsyncSession):
    """
    UTC-02-TC-04: Email and password are both required.
    """
    with pytest.raises(HTTPException) as exc_info:
        await login_user(LoginRequest(email="user@test.com"), db_session)
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Email and password are required."


# --- Test ID: UTC-03 ---

@pytest.mark.asyncio
async def test_get_user_by_email(db_session: AsyncSession, existing_user_for_login):
    """
    UTC-03-TC-01: Lookup returns the account or None.
    """
    found = await get_user_by_email("user@test.com", db_session)
    assert found is not None and found.id == existing_user_for_login.id
    assert await get_user_by_email("missing@test.com", db_session) is None


@pytest.mark.asyncio
async def test_register_and_login_with_long_password(db_session: AsyncSession):
    """
    UTC-03-TC-02: Passwords longer than 72 bytes register and log in.
    """
    long_password = "Aa1!" + "x" * 80
    user_payload = _user_create("long@test.com").model_copy(update={"password": long_password})
    await register_user(user_payload, db_session)

    token = await login_user(
        LoginRequest(email="long@test.com", password=long_password), db_session
    )
    assert token.user.email == "long@test.com"
