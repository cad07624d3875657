# src/password_reset/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_async_session
from src.password_reset import schemas, service
from src.password_reset.exceptions import unexpected_errors

router = APIRouter()

# A missing body is treated like an empty one so the service reports it as 400


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=schemas.RequestResetResponse,
)
async def route_request_reset(
    payload: schemas.RequestResetSchema | None = None,
    db: AsyncSession = Depends(get_async_session),
):
    payload = payload or schemas.RequestResetSchema()
    with unexpected_errors("forgot-password"):
        return await service.request_password_reset(payload.email, db)


@router.post(
    "/verify-otp",
    status_code=status.HTTP_200_OK,
    response_model=schemas.ResetTokenResponse,
)
async def route_verify_otp(
    payload: schemas.VerifyOTPSchema | None = None,
    db: AsyncSession = Depends(get_async_session),
):
    payload = payload or schemas.VerifyOTPSchema()
    with unexpected_errors("verify-otp"):
        return await service.verify_otp_code(payload.email, payload.code, db)


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=schemas.MessageResponse,
)
async def route_reset_password(
    payload: schemas.ResetPasswordSchema | None = None,
    db: AsyncSession = Depends(get_async_session),
):
    payload = payload or schemas.ResetPasswordSchema()
    with unexpected_errors("reset-password"):
        return await service.reset_password(payload.reset_token, payload.new_password, db)
