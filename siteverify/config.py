"""
Configuration via pydantic-settings.

All settings are loaded from environment variables (and a .env file).
Nothing here is required: an application may build requests and clients
directly and never touch Settings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VERIFY_URL = "https://api.hcaptcha.com/siteverify"


class HCaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Empty is allowed here; Secret.parse rejects it when a request is built
    hcaptcha_secret: str = ""
    hcaptcha_site_key: Optional[str] = None
    hcaptcha_verify_url: str = VERIFY_URL
    hcaptcha_timeout_seconds: float = Field(default=5.0, gt=0)


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    hcaptcha: Optional[HCaptchaSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "Settings":
        # Populate sub-configs from the same env/dotenv source
        if self.hcaptcha is None:
            self.hcaptcha = HCaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        return self
