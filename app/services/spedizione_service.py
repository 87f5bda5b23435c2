"""
Servizi per la gestione delle spedizioni.

Il numero spedizione è assegnato qui, una sola volta, al momento
dell'inserimento: MAX(numero) + 1 nella stessa transazione dell'INSERT,
con vincolo UNIQUE a garanzia tra istanze concorrenti.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from sqlalchemy.exc import IntegrityError

from app.models import Spedizione
from app.services.dto import SpedizionePayload
from app.services.errors import ConflictError
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork


def list_spedizioni() -> List[Spedizione]:
    with UnitOfWork() as uow:
        return uow.spedizioni.list_for_ui()


def get_spedizione(spedizione_id: int) -> Optional[Spedizione]:
    with UnitOfWork() as uow:
        return uow.spedizioni.get_by_id(spedizione_id)


def create_spedizione(payload: Union[SpedizionePayload, Mapping[str, Any]]) -> Spedizione:
    """
    Crea una spedizione assegnando il prossimo numero progressivo.

    Raises:
        pydantic.ValidationError: payload non valido.
        ValueError: committente, destinatario o giro inesistenti.
        ConflictError: numero DDT già registrato per il committente, oppure
            numero spedizione assegnato in concorrenza (il chiamante può ritentare).
    """
    if not isinstance(payload, SpedizionePayload):
        payload = SpedizionePayload.model_validate(dict(payload))

    with UnitOfWork() as uow:
        if uow.committenti.get_by_id(payload.committente_id) is None:
            raise ValueError("Committente non valido")
        if uow.destinatari.get_by_id(payload.destinatario_id) is None:
            raise ValueError("Destinatario non valido")
        if payload.giro_id is not None and uow.giri.get_by_id(payload.giro_id) is None:
            raise ValueError("Giro non valido")

        spedizione = Spedizione()
        payload.apply_to(spedizione)
        spedizione.numero_spedizione = uow.spedizioni.next_numero_spedizione()
        uow.spedizioni.add(spedizione)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError(
                f"Spedizione non salvata: DDT {payload.numero_ddt} già registrato "
                "per questo committente o numerazione occupata, riprovare"
            ) from exc

        log_structured_event(
            "spedizione_created",
            message="Spedizione creata",
            spedizione_id=spedizione.id,
            numero_spedizione=spedizione.numero_spedizione,
            committente_id=spedizione.committente_id,
            numero_ddt=spedizione.numero_ddt,
        )
        return spedizione


def assign_spedizione(spedizione_id: int, giro_id: Optional[int]) -> Optional[Spedizione]:
    """
    Assegna (o rimuove) il giro di una spedizione dal tabellone pianificazione.
    Con un giro lo stato diventa ASSEGNATA, senza torna INSERITA.
    """
    with UnitOfWork() as uow:
        spedizione = uow.spedizioni.get_by_id(spedizione_id)
        if spedizione is None:
            return None
        if giro_id is not None and uow.giri.get_by_id(giro_id) is None:
            raise ValueError("Giro non valido")

        spedizione.giro_id = giro_id
        spedizione.stato = "ASSEGNATA" if giro_id else "INSERITA"
        uow.commit()
        return spedizione


def update_spedizione_stato(spedizione_id: int, stato: str) -> Optional[Spedizione]:
    with UnitOfWork() as uow:
        spedizione = uow.spedizioni.get_by_id(spedizione_id)
        if spedizione is None:
            return None
        spedizione.stato = stato
        uow.commit()
        return spedizione
