# file: app/credentials.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict

from app.config import Settings

log = logging.getLogger("credentials")

class CredentialError(RuntimeError):
    """Raised when no usable service-account credential can be loaded"""

def load_service_account(settings: Settings) -> Dict[str, Any]:
    """
    Resolve the Firebase service-account blob.

    The FIREBASE_SERVICE_ACCOUNT env var (a JSON string) wins; otherwise the
    local credentials file is read. Either source must hold a JSON object.
    """
    if settings.service_account_json:
        try:
            data = json.loads(settings.service_account_json)
        except ValueError as e:
            raise CredentialError(f"Failed to parse FIREBASE_SERVICE_ACCOUNT: {e}") from e
        source = "environment variable"
    else:
        try:
            data = json.loads(Path(settings.service_account_file).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CredentialError(f"Failed to load Firebase credentials: {e}") from e
        source = "local file"

    if not isinstance(data, dict):
        raise CredentialError(f"Firebase credentials from {source} must be a JSON object")

    log.info("Loaded Firebase credentials from %s", source)
    return data
