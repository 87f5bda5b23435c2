"""
Servizi per la gestione dei giri di consegna.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from app.models import Giro
from app.services.dto import GiroPayload
from app.services.logging import log_structured_event
from app.services.unit_of_work import UnitOfWork


def list_giri_by_data(data: date) -> List[Giro]:
    """Giri di una giornata con autista e mezzo (tabellone pianificazione)."""
    with UnitOfWork() as uow:
        return uow.giri.list_by_data(data)


def get_giro_detail(giro_id: int) -> Optional[Giro]:
    """Giro con autista, mezzo e spedizioni assegnate (stampa DDT del giro)."""
    with UnitOfWork() as uow:
        return uow.giri.get_with_details(giro_id)


def create_giro(payload: GiroPayload) -> Giro:
    with UnitOfWork() as uow:
        if uow.autisti.get_by_id(payload.autista_id) is None:
            raise ValueError("Autista non valido")
        if uow.mezzi.get_by_id(payload.mezzo_id) is None:
            raise ValueError("Mezzo non valido")

        giro = Giro()
        payload.apply_to(giro)
        uow.giri.add(giro)
        uow.commit()
        return giro


def delete_giro(giro_id: int) -> bool:
    """
    Elimina un giro. Le spedizioni assegnate tornano INSERITA senza giro,
    nella stessa transazione della cancellazione.
    """
    with UnitOfWork() as uow:
        giro = uow.giri.get_by_id(giro_id)
        if giro is None:
            return False

        unassigned = uow.spedizioni.unassign_giro(giro_id)
        uow.giri.delete(giro)
        uow.commit()

    log_structured_event(
        "giro_deleted",
        message="Giro eliminato",
        giro_id=giro_id,
        spedizioni_unassigned=unassigned,
    )
    return True
