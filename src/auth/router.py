# src/auth/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.schemas import LoginRequest, Token, UserCreate
from src.auth.service import login_user, register_user
from src.database import get_async_session

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_async_session)):
    await register_user(user, db)
    return {"message": "User registered successfully."}


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest, db: AsyncSession = Depends(get_async_session)
):
    return await login_user(credentials, db)
