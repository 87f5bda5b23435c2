"""
Candidati di import DDT: una proposta di spedizione per ogni pagina.

Vivono solo nella memoria del chiamante per la durata di una sessione
di import; il server non conserva stato tra una richiesta e l'altra.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

STATUS_PENDING = "pending"
STATUS_SAVED = "saved"
STATUS_ERROR = "error"


@dataclass
class CandidateMetadata:
    committente_mapped: bool = False
    destinatario_mapped: bool = False
    destinatario_created: bool = False
    destinatario_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "committenteMapped": self.committente_mapped,
            "destinatarioMapped": self.destinatario_mapped,
            "destinatarioCreated": self.destinatario_created,
        }
        if self.destinatario_error:
            payload["destinatarioError"] = self.destinatario_error
        return payload


@dataclass
class ImportCandidate:
    page_number: int
    # Campi estratti (chiavi come sul filo) + committenteId/destinatarioId risolti
    data: Optional[Dict[str, Any]] = None
    metadata: Optional[CandidateMetadata] = None
    error: Optional[str] = None
    status: str = STATUS_PENDING
    shipment: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def committente_id(self) -> Optional[int]:
        return (self.data or {}).get("committenteId")

    @property
    def destinatario_id(self) -> Optional[int]:
        return (self.data or {}).get("destinatarioId")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"pageNumber": self.page_number}
        if self.data is not None:
            payload["data"] = dict(self.data)
        if self.metadata is not None:
            payload["metadata"] = self.metadata.to_dict()
        if self.error:
            payload["error"] = self.error
        return payload
