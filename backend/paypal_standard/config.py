"""
PayPal Standard Configuration Module

Loads merchant defaults and server options from environment variables.
"""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every variable is prefixed with PAYPAL_STANDARD_, e.g.
    PAYPAL_STANDARD_PAYPAL_EMAIL=shop@example.com

    Merchant Notes:
    - paypal_email is the business account that receives payments
    - ipn_url overrides the notification URL stored in the PayPal account
    - The gateway submit URL is fixed and intentionally not configurable
    """

    # Merchant defaults
    paypal_email: str = ""
    currency_code: str = "GBP"
    ipn_url: str = ""
    return_url: str = ""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "PAYPAL_STANDARD_"
        case_sensitive = False


# Global settings instance
settings = Settings()
