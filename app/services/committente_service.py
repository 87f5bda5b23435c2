"""
Servizi per la gestione dei committenti.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.models import Committente
from app.services.dto import CommittentePayload
from app.services.errors import ConflictError
from app.services.unit_of_work import UnitOfWork


def list_committenti() -> List[Committente]:
    """Elenco committenti ordinato per nome (dropdown, filtri, import DDT)."""
    with UnitOfWork() as uow:
        return uow.committenti.list_all_ordered()


def get_committente(committente_id: int) -> Optional[Committente]:
    with UnitOfWork() as uow:
        return uow.committenti.get_by_id(committente_id)


def create_committente(payload: CommittentePayload) -> Committente:
    with UnitOfWork() as uow:
        committente = Committente()
        payload.apply_to(committente)
        uow.committenti.add(committente)
        uow.commit()
        return committente


def update_committente(committente_id: int, payload: CommittentePayload) -> Optional[Committente]:
    with UnitOfWork() as uow:
        committente = uow.committenti.get_by_id(committente_id)
        if committente is None:
            return None
        payload.apply_to(committente)
        uow.commit()
        return committente


def delete_committente(committente_id: int) -> bool:
    """Elimina un committente. Fallisce se ha spedizioni collegate."""
    with UnitOfWork() as uow:
        committente = uow.committenti.get_by_id(committente_id)
        if committente is None:
            return False
        if committente.spedizioni:
            raise ConflictError("Committente con spedizioni collegate: impossibile eliminarlo")
        uow.committenti.delete(committente)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError("Committente in uso: impossibile eliminarlo") from exc
        return True
