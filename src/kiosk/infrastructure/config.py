"""Process configuration, read from ``KIOSK_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="KIOSK_", extra="ignore")

    data_dir: Path = Path("./data")
    log_level: str = "INFO"

    # mock | mercadopago
    payment_provider: Literal["mock", "mercadopago"] = "mock"
    mercadopago_base_url: str = "https://api.mercadopago.com"
    mercadopago_access_token: str | None = None
    # Point of sale the kiosk's QR codes are issued for.
    mercadopago_external_pos_id: str = "KIOSK001"
    notification_url: str | None = Field(
        default=None,
        description="Where the provider posts payment notifications for new QR orders",
    )
    payment_timeout_seconds: float = 10.0
    webhook_secret: str | None = Field(
        default=None,
        description="HMAC-SHA256 key for webhook signatures; unset rejects every signature",
    )

    checkout_payment_delay_seconds: float = Field(default=0.0, ge=0.0, le=5.0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
