"""
Risoluzione di committente e destinatario estratti da un DDT verso le
anagrafiche esistenti.

Il confronto è volutamente semplice (stringhe normalizzate, nessuno
scoring): l'operatore rivede comunque ogni candidato prima del salvataggio.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.services.destinatario_service import create_destinatario
from app.services.dto import DestinatarioPayload
from app.services.errors import ConflictError
from app.services.logging import log_structured_event

PLACEHOLDER_TEXT = "Da verificare"
PLACEHOLDER_CAP = "00000"
PLACEHOLDER_PROVINCIA = "XX"
AUTO_CREATED_NOTE = "Creato automaticamente da import DDT - dati da verificare"


@dataclass(frozen=True)
class KnownCommittente:
    id: int
    nome: str


@dataclass(frozen=True)
class KnownDestinatario:
    id: int
    ragione_sociale: str
    citta: str


@dataclass(frozen=True)
class DestinatarioResolution:
    id: Optional[int] = None
    created: bool = False
    error: Optional[str] = None


def normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def resolve_committente(name: Optional[str], known: Sequence[KnownCommittente]) -> Optional[int]:
    """
    Id del committente corrispondente al nome estratto, oppure None.

    Prima il confronto esatto sul nome normalizzato, poi il contenimento in
    entrambe le direzioni ("Cati S.p.A." trova "Cati"). Vince il primo.
    """
    target = normalize(name)
    if not target:
        return None

    for committente in known:
        if normalize(committente.nome) == target:
            return committente.id

    for committente in known:
        candidate = normalize(committente.nome)
        if candidate and (candidate in target or target in candidate):
            return committente.id

    return None


def build_placeholder_payload(extracted: Mapping[str, Any]) -> DestinatarioPayload:
    """Payload di creazione con i segnaposto al posto dei dati mancanti."""
    return DestinatarioPayload.model_validate(
        {
            "ragioneSociale": (extracted.get("ragioneSociale") or "").strip(),
            "indirizzo": extracted.get("indirizzo") or PLACEHOLDER_TEXT,
            "cap": extracted.get("cap") or PLACEHOLDER_CAP,
            "citta": (extracted.get("citta") or "").strip(),
            "provincia": extracted.get("provincia") or PLACEHOLDER_PROVINCIA,
            "zona": PLACEHOLDER_TEXT,
            "note": AUTO_CREATED_NOTE,
        }
    )


def _default_create(payload: DestinatarioPayload) -> int:
    return create_destinatario(payload).id


def resolve_or_create_destinatario(
    extracted: Optional[Mapping[str, Any]],
    known: Sequence[KnownDestinatario],
    *,
    create: Optional[Callable[[DestinatarioPayload], int]] = None,
) -> Tuple[DestinatarioResolution, List[KnownDestinatario]]:
    """
    Risolve il destinatario estratto sulla coppia (ragione sociale, città).

    Restituisce l'esito e l'elenco aggiornato dei destinatari noti: se è stato
    creato un nuovo record, compare in coda, così le pagine successive dello
    stesso documento lo ritrovano invece di crearne un duplicato.
    Un errore di creazione non interrompe la pagina: viene riportato in
    ``DestinatarioResolution.error``.
    """
    known = list(known)
    if not extracted:
        return DestinatarioResolution(), known

    nome = normalize(extracted.get("ragioneSociale"))
    citta = normalize(extracted.get("citta"))
    if not nome or not citta:
        return DestinatarioResolution(), known

    for destinatario in known:
        if normalize(destinatario.ragione_sociale) == nome and normalize(destinatario.citta) == citta:
            return DestinatarioResolution(id=destinatario.id), known

    create = create or _default_create
    try:
        payload = build_placeholder_payload(extracted)
        new_id = create(payload)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        return DestinatarioResolution(error=f"Dati destinatario non validi: {fields}"), known
    except (ConflictError, SQLAlchemyError) as exc:
        log_structured_event(
            "ddt_destinatario_create_failed",
            message="Creazione automatica destinatario fallita",
            level="warning",
            ragione_sociale=extracted.get("ragioneSociale"),
            error=str(exc),
        )
        return DestinatarioResolution(error="Impossibile creare il destinatario"), known

    log_structured_event(
        "ddt_destinatario_created",
        message="Destinatario creato da import DDT",
        destinatario_id=new_id,
        ragione_sociale=payload.ragione_sociale,
        citta=payload.citta,
    )
    known.append(KnownDestinatario(id=new_id, ragione_sociale=payload.ragione_sociale, citta=payload.citta))
    return DestinatarioResolution(id=new_id, created=True), known
