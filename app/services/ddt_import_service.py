"""
Import DDT: dal file caricato ai candidati spedizione, una pagina alla volta.

Flusso:
    1. estrazione testo per pagina (ocr_service.extract_pages)
    2. per ogni pagina non vuota, in ordine: estrazione campi AI,
       risoluzione committente, risoluzione/creazione destinatario
    3. risposta con i candidati e il riepilogo conteggi

Un errore su una pagina resta confinato al suo candidato. Solo un errore
di estrazione testo interrompe l'intera richiesta.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from app.services import ai_service, ocr_service
from app.services.dto import CandidateMetadata, ImportCandidate
from app.services.entity_resolution_service import (
    KnownCommittente,
    KnownDestinatario,
    resolve_committente,
    resolve_or_create_destinatario,
)
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

NO_DATA_ERROR = "Nessun dato riconosciuto"


class NoTextExtractedError(Exception):
    """Il documento non contiene testo estraibile."""


@dataclass
class ImportResult:
    candidates: List[ImportCandidate] = field(default_factory=list)
    total_pages: int = 0

    @property
    def processed_pages(self) -> int:
        return len(self.candidates)

    @property
    def pages_with_errors(self) -> int:
        return sum(1 for c in self.candidates if c.error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "candidates": [c.to_dict() for c in self.candidates],
            "summary": {
                "totalPages": self.total_pages,
                "processedPages": self.processed_pages,
                "pagesWithErrors": self.pages_with_errors,
            },
        }


def load_known_entities() -> Tuple[List[KnownCommittente], List[KnownDestinatario]]:
    """Fotografia delle anagrafiche usata per risolvere tutte le pagine del documento."""
    with UnitOfWork() as uow:
        committenti = [KnownCommittente(id=c.id, nome=c.nome) for c in uow.committenti.list_all()]
        destinatari = [
            KnownDestinatario(id=d.id, ragione_sociale=d.ragione_sociale, citta=d.citta)
            for d in uow.destinatari.list_all()
        ]
    return committenti, destinatari


def build_candidates(
    pages: Sequence[Tuple[int, str]],
    *,
    committenti: Sequence[KnownCommittente],
    destinatari: Sequence[KnownDestinatario],
    extract_fields: Optional[Callable[[str], Dict[str, Any]]] = None,
    create_destinatario: Optional[Callable] = None,
) -> List[ImportCandidate]:
    """
    Un candidato per ogni pagina con testo, in ordine di pagina.

    ``pages`` sono coppie (numero pagina 1-based, testo). L'elenco dei
    destinatari noti viene passato di pagina in pagina e cresce con quelli
    creati, per non duplicarli all'interno dello stesso documento.
    """
    extract_fields = extract_fields or ai_service.parse_ddt_with_ai
    candidates: List[ImportCandidate] = []
    known_destinatari = list(destinatari)

    for page_number, text in sorted(pages, key=lambda p: p[0]):
        if not (text or "").strip():
            continue

        try:
            fields = extract_fields(text)
        except Exception as exc:
            logger.warning(
                "Estrazione AI fallita",
                extra={"component": "ddt_import", "page": page_number, "error": str(exc)},
            )
            fields = None

        if not fields:
            candidates.append(ImportCandidate(page_number=page_number, error=NO_DATA_ERROR))
            continue

        data = dict(fields)
        committente_id = resolve_committente(data.get("committente"), committenti)
        resolution, known_destinatari = resolve_or_create_destinatario(
            data.get("destinatario"),
            known_destinatari,
            create=create_destinatario,
        )

        if committente_id is not None:
            data["committenteId"] = committente_id
        if resolution.id is not None:
            data["destinatarioId"] = resolution.id

        candidates.append(
            ImportCandidate(
                page_number=page_number,
                data=data,
                metadata=CandidateMetadata(
                    committente_mapped=committente_id is not None,
                    destinatario_mapped=resolution.id is not None,
                    destinatario_created=resolution.created,
                    destinatario_error=resolution.error,
                ),
            )
        )

    return candidates


def import_ddt(
    data: bytes,
    media_type: str,
    *,
    extract_pages: Optional[Callable[..., List[str]]] = None,
    extract_fields: Optional[Callable[[str], Dict[str, Any]]] = None,
) -> ImportResult:
    """
    Elabora un DDT caricato e restituisce i candidati spedizione.

    Raises:
        ocr_service.UnsupportedMediaTypeError: tipo file non ammesso.
        ocr_service.OcrError: estrazione testo fallita.
        NoTextExtractedError: nessuna pagina con testo.
    """
    extract_pages = extract_pages or ocr_service.extract_pages
    pages = extract_pages(data, media_type, logger=logger)
    numbered = [(index + 1, text) for index, text in enumerate(pages)]
    if not any((text or "").strip() for _, text in numbered):
        raise NoTextExtractedError("Nessun testo estratto dal documento")

    committenti, destinatari = load_known_entities()
    result = ImportResult(
        candidates=build_candidates(
            numbered,
            committenti=committenti,
            destinatari=destinatari,
            extract_fields=extract_fields,
        ),
        total_pages=len(pages),
    )

    log_structured_event(
        "ddt_import_completed",
        message="Import DDT completato",
        media_type=media_type,
        total_pages=result.total_pages,
        processed_pages=result.processed_pages,
        pages_with_errors=result.pages_with_errors,
        created_destinatari=sum(
            1 for c in result.candidates if c.metadata and c.metadata.destinatario_created
        ),
    )
    return result
