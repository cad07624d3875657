# src/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str
    DATABASE_URL: str
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///./test.db"
    CORS_ORIGINS: str
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


class EmailSettings(BaseSettings):
    COMMUNICATION_SERVICES_CONNECTION_STRING: str | None = None
    SENDER_ADDRESS: str
    APP_NAME: str = "Inventory Manager"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


email_settings = EmailSettings()
