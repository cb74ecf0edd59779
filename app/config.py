# app/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

ROOT_DIR = Path(__file__).resolve().parents[1]

def _as_list(v: str | None, default: str = "") -> List[str]:
    raw = default if v is None else v
    return [item.strip() for item in raw.split(",") if item.strip()]

@dataclass
class Settings:
    # Firebase service account
    # JSON string (Railway / container deploys) takes priority over the file
    service_account_json: str | None = os.getenv("FIREBASE_SERVICE_ACCOUNT") or None
    service_account_file: str = os.getenv(
        "FIREBASE_CREDENTIALS_FILE", str(ROOT_DIR / "service-account.json")
    )

    # HTTP server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))
    cors_origins: List[str] = field(default_factory=lambda: _as_list(os.getenv("CORS_ORIGINS"), "*"))

    # Runtime
    env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
