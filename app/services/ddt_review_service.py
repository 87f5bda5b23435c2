"""
Revisione e conferma dei candidati di import DDT.

``ImportReview`` è il working set dell'operatore: ogni candidato può essere
confermato (diventa una spedizione), scartato, oppure esportato verso il
form di inserimento manuale. Lo stato vive solo qui, lato chiamante.

    pending -> saved            conferma riuscita (terminale)
    pending -> error -> saved   conferma fallita, ritentabile
    pending/error -> (rimosso)  scarto o modifica manuale
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.services.dto import STATUS_ERROR, STATUS_SAVED, ImportCandidate
from app.services.errors import ConflictError
from app.services.logging import log_structured_event
from app.services.spedizione_service import create_spedizione


def _default_create_shipment(payload: Dict[str, Any]):
    return create_spedizione(payload)


def synthesize_numero_ddt(page_number: int, now: Optional[float] = None) -> str:
    stamp = int((now if now is not None else time.time()) * 1000)
    return f"DDT-AUTO-{stamp}-P{page_number}"


def build_shipment_payload(candidate: ImportCandidate) -> Dict[str, Any]:
    """Payload per la creazione spedizione a partire da un candidato."""
    data = candidate.data or {}
    return {
        "committenteId": data.get("committenteId"),
        "destinatarioId": data.get("destinatarioId"),
        "dataDDT": data.get("dataDDT"),
        "numeroDDT": data.get("numeroDDT") or synthesize_numero_ddt(candidate.page_number),
        "colli": data.get("colli"),
        "pesoKg": data.get("peso"),
        "contrassegno": data.get("contrassegno"),
        "note": f"Importato da DDT - pagina {candidate.page_number}",
        "stato": "INSERITA",
        "giroId": None,
    }


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        return "Campi mancanti o non validi: " + ", ".join(fields)
    return str(exc) or "Errore durante il salvataggio"


class ImportReview:
    def __init__(
        self,
        candidates: Iterable[ImportCandidate],
        create_shipment: Optional[Callable[[Dict[str, Any]], Any]] = None,
    ):
        self.candidates: List[ImportCandidate] = sorted(candidates, key=lambda c: c.page_number)
        self.create_shipment = create_shipment or _default_create_shipment

    def get(self, page_number: int) -> Optional[ImportCandidate]:
        for candidate in self.candidates:
            if candidate.page_number == page_number:
                return candidate
        return None

    @staticmethod
    def is_auto_save_eligible(candidate: ImportCandidate) -> bool:
        return (
            candidate.data is not None
            and not candidate.error
            and candidate.status != STATUS_SAVED
            and candidate.committente_id is not None
            and candidate.destinatario_id is not None
        )

    def confirm(self, page_number: int) -> bool:
        """
        Conferma un candidato creando la spedizione. True se salvato.

        Un candidato già salvato non viene mai ricommesso. Un candidato senza
        committente o destinatario risolti va completato a mano (``edit``).
        Un candidato in errore può essere ritentato: l'errore precedente non
        blocca la nuova conferma.
        """
        candidate = self.get(page_number)
        if candidate is None or candidate.status == STATUS_SAVED:
            return False
        if candidate.data is None or candidate.committente_id is None or candidate.destinatario_id is None:
            return False

        payload = build_shipment_payload(candidate)
        try:
            shipment = self.create_shipment(payload)
        except (ValueError, ConflictError, SQLAlchemyError) as exc:
            candidate.status = STATUS_ERROR
            candidate.error = _describe_error(exc)
            log_structured_event(
                "ddt_candidate_confirm_failed",
                message="Conferma candidato DDT fallita",
                level="warning",
                page=page_number,
                error=candidate.error,
            )
            return False

        candidate.status = STATUS_SAVED
        candidate.error = None
        candidate.shipment = {
            "id": getattr(shipment, "id", None),
            "numeroSpedizione": getattr(shipment, "numero_spedizione", None),
        }
        return True

    def confirm_all(self) -> int:
        """Conferma tutti i candidati idonei, uno per uno. Restituisce i salvati."""
        eligible = [c.page_number for c in self.candidates if self.is_auto_save_eligible(c)]
        return sum(1 for page_number in eligible if self.confirm(page_number))

    def discard(self, page_number: int) -> bool:
        """Toglie il candidato dal working set. Nessun effetto sui dati salvati."""
        candidate = self.get(page_number)
        if candidate is None:
            return False
        self.candidates.remove(candidate)
        return True

    def edit(self, page_number: int) -> Optional[Dict[str, Any]]:
        """Valori da precompilare nel form spedizione; il candidato esce dalla revisione."""
        candidate = self.get(page_number)
        if candidate is None:
            return None
        data = candidate.data or {}
        prefill = {
            key: data.get(key)
            for key in ("committenteId", "destinatarioId", "dataDDT", "numeroDDT", "colli", "contrassegno")
            if data.get(key) is not None
        }
        if data.get("peso") is not None:
            prefill["pesoKg"] = data["peso"]
        self.candidates.remove(candidate)
        return prefill

    @property
    def pending(self) -> List[ImportCandidate]:
        return [c for c in self.candidates if c.status != STATUS_SAVED]
