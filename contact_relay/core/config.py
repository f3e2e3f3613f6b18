import logging
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contact_relay.constants.constants import (
    DEFAULT_CONTACT_PATH,
    DEFAULT_FROM_NAME,
    DEFAULT_TO_EMAIL,
    RECAPTCHA_VERIFY_URL as DEFAULT_RECAPTCHA_VERIFY_URL,
    SENDGRID_API_URL as DEFAULT_SENDGRID_API_URL,
)

# Load environment variables from .env file
load_dotenv(".env")
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the contact relay function."""

    # ------------------------------
    # Email delivery (SendGrid)
    # ------------------------------
    SENDGRID_API_KEY: str = ""
    SENDGRID_API_URL: str = DEFAULT_SENDGRID_API_URL
    TO_EMAIL: str = DEFAULT_TO_EMAIL
    FROM_EMAIL: Optional[str] = None
    FROM_NAME: str = DEFAULT_FROM_NAME

    # ------------------------------
    # Human verification (reCAPTCHA)
    # ------------------------------
    RECAPTCHA_SECRET_KEY: Optional[str] = None
    RECAPTCHA_VERIFY_URL: str = DEFAULT_RECAPTCHA_VERIFY_URL

    # ------------------------------
    # HTTP surface
    # ------------------------------
    CONTACT_PATH: str = DEFAULT_CONTACT_PATH
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # ------------------------------
    # Logging
    # ------------------------------
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("TO_EMAIL", mode="before")
    @classmethod
    def fallback_recipient(cls, value):
        """An empty recipient falls back to the built-in address."""
        return value or DEFAULT_TO_EMAIL

    @field_validator("RECAPTCHA_SECRET_KEY", "FROM_EMAIL", mode="before")
    @classmethod
    def empty_as_unset(cls, value):
        return value or None

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        """Accept level names in any case; unknown names fall back to INFO."""
        level = str(value or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            return "INFO"
        return level

    @property
    def recaptcha_configured(self) -> bool:
        return bool(self.RECAPTCHA_SECRET_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Build the process-wide settings once and reuse them for every invocation."""
    settings = Settings()
    if not settings.recaptcha_configured:
        logger.warning("⚠️ RECAPTCHA_SECRET_KEY not configured, submissions will be rejected")
    return settings
