"""Global configuration singleton for marketlocale.

Reads values from environment variables by default.  When embedded
(e.g. from the NiceGUI sample host), the caller can populate the
singleton *before* the app starts so nothing has to live in the
process environment.

    from marketlocale.config import settings
    settings.LOCALES_DIR = "/srv/locales"
"""

import os
from typing import Optional

DEFAULTS: dict[str, str] = {
    "PREFERENCE_KEY": "preferred_language",
    "LANGUAGE_COOKIE": "preferred_language",
    "SESSION_IDLE_TIMEOUT": "1800",
    "LOG_LEVEL": "INFO",
}


class Settings:
    """Lightweight mutable config, one global instance."""

    LOCALES_DIR: Optional[str] = None
    PREFERENCE_KEY: Optional[str] = None
    LANGUAGE_COOKIE: Optional[str] = None
    SESSION_IDLE_TIMEOUT: Optional[int] = None
    LOG_LEVEL: Optional[str] = None

    def get(self, name: str) -> Optional[str]:
        """Return the attribute value if set, otherwise env, otherwise the default."""
        value = getattr(self, name, None)
        if value is not None:
            return value if isinstance(value, str) else str(value)
        return os.getenv(name) or DEFAULTS.get(name)

    def get_int(self, name: str) -> int:
        value = self.get(name)
        try:
            return int(value) if value is not None else int(DEFAULTS[name])
        except ValueError:
            return int(DEFAULTS[name])


settings = Settings()
