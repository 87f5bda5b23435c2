"""
Pacchetto per i servizi (logica di business) dell'applicazione.

I servizi orchestrano:
- repository (accesso al DB)
- estrazione testo e campi dai DDT (OCR, AI)
- validazioni e transazioni
- logging strutturato
"""

from .settings_service import get_setting
from .errors import ConflictError

__all__ = [
    # Settings
    "get_setting",
    # Errors
    "ConflictError",
]
