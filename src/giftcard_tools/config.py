"""
Process configuration, read from the environment or a local .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.razorpay.com"
DEFAULT_STUB = "v1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    merchant_key: str = ""
    merchant_secret: str = ""
    merchant_id: str = ""
    base_url: str = DEFAULT_BASE_URL
    stub: str = DEFAULT_STUB
    http_timeout: float = 30.0
