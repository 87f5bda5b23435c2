"""
Servizi per la gestione degli autisti.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.models import Autista
from app.services.dto import AutistaPayload
from app.services.errors import ConflictError
from app.services.unit_of_work import UnitOfWork


def list_autisti() -> List[Autista]:
    with UnitOfWork() as uow:
        return uow.autisti.list_all_ordered()


def create_autista(payload: AutistaPayload) -> Autista:
    with UnitOfWork() as uow:
        autista = Autista()
        payload.apply_to(autista)
        uow.autisti.add(autista)
        uow.commit()
        return autista


def update_autista(autista_id: int, payload: AutistaPayload) -> Optional[Autista]:
    with UnitOfWork() as uow:
        autista = uow.autisti.get_by_id(autista_id)
        if autista is None:
            return None
        payload.apply_to(autista)
        uow.commit()
        return autista


def delete_autista(autista_id: int) -> bool:
    with UnitOfWork() as uow:
        autista = uow.autisti.get_by_id(autista_id)
        if autista is None:
            return False
        if autista.giri:
            raise ConflictError("Autista assegnato a uno o più giri: impossibile eliminarlo")
        uow.autisti.delete(autista)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError("Autista in uso: impossibile eliminarlo") from exc
        return True
