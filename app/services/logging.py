"""Helper per logging strutturato JSON nei servizi applicativi."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

SERVICE_LOGGER_NAME = "trasporti.services"


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Registra un evento di business (import DDT, spedizioni, giri) come record JSON.

    Gli handler JSON sono configurati sul root logger da ``app.extensions``; qui
    si usa un logger figlio dedicato ai servizi così da poterne regolare il
    livello separatamente. Un errore di serializzazione non deve mai
    interrompere il flusso applicativo.
    """

    logger = logging.getLogger(SERVICE_LOGGER_NAME)
    log_method = getattr(logger, level.lower(), logger.info)

    payload: Dict[str, Any] = {"action": action}
    payload.update(fields)

    try:
        log_method(message or action, extra=payload)
    except Exception:
        logger.debug("Logging strutturato fallito", exc_info=True)
