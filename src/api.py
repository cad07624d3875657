# src/api.py
from fastapi import APIRouter

from src.auth.router import router as auth_router
from src.password_reset.router import router as password_reset_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(
    password_reset_router, prefix="/auth", tags=["password-reset"]
)
