from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pydantic import field_validator
from typing import Literal, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    port: int = 5000
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    # Resend credentials - must be provided via environment variables
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"

    # Until a domain is verified on Resend, the sandbox sender is the only allowed one
    email_from: str = "onboarding@resend.dev"
    my_email: Optional[str] = None  # Operator inbox receiving submissions

    # CORS settings
    allowed_origins: list[str] = ["*"]

    # Where the landing page form posts to
    contact_endpoint_url: str = "http://localhost:5000/api/contact"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        """Accept level names in any case, e.g. LOG_LEVEL=debug"""
        return value.upper() if isinstance(value, str) else value

    @property
    def email_configured(self) -> bool:
        """True when both the API key and the destination inbox are set"""
        return bool(self.resend_api_key and self.my_email)

@lru_cache
def get_settings():
    return Settings()
