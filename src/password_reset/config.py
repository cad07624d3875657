# src/password_reset/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class PasswordResetSettings(BaseSettings):
    OTP_TTL_SECONDS: int = 300
    OTP_MAX_ATTEMPTS: int = 5
    # Cheaper than password hashing; the secret is short-lived
    OTP_HASH_ROUNDS: int = 10
    RESET_TOKEN_EXPIRE_MINUTES: int = 10
    RESET_TOKEN_PURPOSE: str = "password_reset"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


password_reset_settings = PasswordResetSettings()
