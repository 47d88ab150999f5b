"""
order_notifier/config.py
Application configuration
Environment-driven (Render compatible)

Required:
  - DATABASE_URL
  - SHOPIFY_API_SECRET
Optional:
  - SHOPIFY_API_VERSION      (defaults to 2024-07)
  - META_WA_API_VERSION      (defaults to v20.0)
  - DEFAULT_COUNTRY_CODE     (defaults to 91)
  - NATIONAL_NUMBER_LENGTH   (defaults to 10)
  - OUTBOUND_MODE            (live | dry_run, defaults to live)
  - ADMIN_API_TOKEN          (settings endpoints are disabled when unset)
  - HTTP_TIMEOUT_SECONDS     (defaults to 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(
            f"Missing required environment variable: {name}. "
            f"Set it in your .env / Render / shell before running."
        )
    return value


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class AppSettings:
    shopify_api_secret: str
    shopify_api_version: str
    meta_api_version: str
    default_country_code: str
    national_number_length: int
    outbound_mode: str
    admin_api_token: Optional[str]
    http_timeout_seconds: float


def load_app_settings() -> AppSettings:
    return AppSettings(
        shopify_api_secret=_require_env("SHOPIFY_API_SECRET"),
        shopify_api_version=os.getenv("SHOPIFY_API_VERSION", "2024-07").strip(),
        meta_api_version=os.getenv("META_WA_API_VERSION", "v20.0").strip(),
        default_country_code=os.getenv("DEFAULT_COUNTRY_CODE", "91").strip(),
        national_number_length=int(os.getenv("NATIONAL_NUMBER_LENGTH", "10")),
        outbound_mode=os.getenv("OUTBOUND_MODE", "live").strip().lower(),
        admin_api_token=_optional_env("ADMIN_API_TOKEN"),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "30")),
    )


@lru_cache
def get_app_settings() -> AppSettings:
    return load_app_settings()
