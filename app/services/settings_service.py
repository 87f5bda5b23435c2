"""
Servizi per la gestione delle impostazioni applicative.
"""

from typing import Any

from flask import current_app


def get_setting(key: str, default: Any = "") -> Any:
    value = current_app.config.get(key)
    return default if value is None else value


def get_allowed_ddt_mime_types() -> tuple[str, ...]:
    """Tipi MIME accettati dall'import DDT (PDF, JPEG, PNG)."""
    return tuple(get_setting("DDT_ALLOWED_MIME_TYPES", ()))


def get_ddt_import_max_bytes() -> int:
    return int(get_setting("DDT_IMPORT_MAX_BYTES", 25 * 1024 * 1024))
