# src/auth/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_TYPE: str = "bearer"
    PASSWORD_HASH_ROUNDS: int = 10

    # Used only by `python -m src.auth.seed`
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None
    ADMIN_FIRST_NAME: str | None = None
    ADMIN_LAST_NAME: str | None = None

    @field_validator('JWT_SECRET')
    def validate_jwt_secret(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError('JWT_SECRET must be at least 32 characters long')
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

auth_settings = AuthSettings()
