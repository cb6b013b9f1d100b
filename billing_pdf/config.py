# billing_pdf/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    currency_symbol: str = "₹"
    fallback_org_name: str = "AIRFIT"
    fallback_region: str = "Karnataka"
    display_tz: str = "Asia/Kolkata"
    # directory holding optional brand fonts + logo (see styling/common/brand.py)
    brand_dir: Path | None = None
    page_size: str = "A4"


def _env(name: str, default: str) -> str:
    val = (os.getenv(name) or "").strip()
    return val or default


def load_settings() -> Settings:
    # Local dev convenience: loads from .env if present.
    load_dotenv()

    brand_dir = (os.getenv("INVOICE_BRAND_DIR") or "").strip()
    page_size = _env("INVOICE_PAGE_SIZE", "A4").upper()
    if page_size not in ("A4", "LETTER"):
        raise RuntimeError(f"INVOICE_PAGE_SIZE must be A4 or LETTER, got {page_size!r}")

    display_tz = _env("INVOICE_DISPLAY_TZ", "Asia/Kolkata")
    try:
        ZoneInfo(display_tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(f"INVOICE_DISPLAY_TZ is not a known time zone: {display_tz!r}") from e

    return Settings(
        currency_symbol=_env("INVOICE_CURRENCY_SYMBOL", "₹"),
        fallback_org_name=_env("INVOICE_FALLBACK_ORG_NAME", "AIRFIT"),
        fallback_region=_env("INVOICE_FALLBACK_REGION", "Karnataka"),
        display_tz=display_tz,
        brand_dir=Path(brand_dir) if brand_dir else None,
        page_size=page_size,
    )


_settings_singleton: Settings | None = None


def get_settings() -> Settings:
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = load_settings()
    return _settings_singleton
