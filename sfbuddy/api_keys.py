"""
API key management for the completion service.

The key is read from the ANTHROPIC_API_KEY environment variable (a project
.env file is loaded on import) and can be replaced at runtime from the
settings screen. Keys are never exposed in full; only masked versions leave
this module.
"""

import logging
import os
import threading
from typing import Optional

from dotenv import load_dotenv

from sfbuddy.models import ApiKeyStatus

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))

logger = logging.getLogger(__name__)

PROVIDER = "anthropic"
PROVIDER_LABEL = "Anthropic"
ENV_VAR = "ANTHROPIC_API_KEY"


def mask_key(key: Optional[str]) -> Optional[str]:
    if key and len(key) > 8:
        return f"{key[:4]}...{key[-4:]}"
    elif key:
        return "***"
    return None


class ApiKeysManager:
    """Holds the completion-service credential and its validity flag.

    The flag is sticky: it is set when the key is missing or the service
    rejected it, and cleared only by a new key or a successful request.
    """

    def __init__(self, api_key: Optional[str] = None, env_var: str = ENV_VAR):
        self._lock = threading.Lock()
        if api_key is None:
            api_key = os.getenv(env_var, "")
        self._key = api_key.strip()
        self.missing_or_invalid = not self._key
        logger.info(f"API key manager initialized. Key: {'Set' if self._key else 'Not Set'}")

    def get_key(self) -> Optional[str]:
        """Current key, or None when no key is configured."""
        return self._key or None

    def set_key(self, api_key: str) -> None:
        with self._lock:
            self._key = (api_key or "").strip()
            self.missing_or_invalid = not self._key
        logger.info("API key updated.")

    def is_configured(self) -> bool:
        return bool(self._key)

    def mark_invalid(self) -> None:
        with self._lock:
            self.missing_or_invalid = True

    def mark_valid(self) -> None:
        with self._lock:
            self.missing_or_invalid = False

    def get_status(self) -> ApiKeyStatus:
        """Masked status for the settings screen."""
        return ApiKeyStatus(
            provider=PROVIDER,
            label=PROVIDER_LABEL,
            configured=self.is_configured(),
            masked_key=mask_key(self._key),
            missing_or_invalid=self.missing_or_invalid,
        )
