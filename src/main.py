# src/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import api_router
from src.auth import models as auth_models  # noqa
from src.config import settings
from src.logging_config import setup_logging
from src.password_reset import models as password_reset_models  # noqa
from src.password_reset.exceptions import (
    PasswordResetError,
    password_reset_exception_handler,
)

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME)

app.include_router(api_router)
app.add_exception_handler(PasswordResetError, password_reset_exception_handler)

origins = settings.CORS_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.get("/")
async def read_root():
    return {"msg": f"Welcome to {settings.PROJECT_NAME}!"}


@app.get("/health-check")
async def health_check():
    return {"status": "healthy"}
