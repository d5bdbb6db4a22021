import secrets
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DB_URL: str = "sqlite:///./data/onboarding.db"
    DATA_DIR: str = "./data"
    PUBLIC_DIR: str = "./public"
    CORS_ORIGIN: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # bootstrap admin, only used when the admin table is empty
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    JWT_SECRET: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    TOKEN_TTL_HOURS: int = 8
    BCRYPT_ROUNDS: int = Field(default=12, ge=12)
    LOGIN_MAX_ATTEMPTS: int = 10
    LOGIN_WINDOW_SECONDS: int = 300

    # form gate
    FORM_PASSWORD_HASH: Optional[str] = None
    COOKIE_SECRET: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    COOKIE_SECURE: bool = False
    COOKIE_MAX_AGE_HOURS: int = 8

    # transactional email (Brevo)
    BREVO_API_KEY: Optional[str] = None
    BREVO_API_URL: str = "https://api.brevo.com/v3/smtp/email"
    SENDER_EMAIL: str = "hr-onboarding@example.com"
    SENDER_NAME: str = "HR New Hire"
    NOTIFY_EMAIL: Optional[str] = None
    EMAIL_TIMEOUT_SECONDS: float = 5.0

    STRICT_PROGRESSION: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

settings = Settings()
