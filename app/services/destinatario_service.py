"""
Servizi per la gestione dei destinatari.

Oltre al CRUD classico, ``create_destinatario`` è usato dall'import DDT per
creare in automatico i destinatari non ancora in anagrafica.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.models import Destinatario
from app.services.dto import DestinatarioPayload
from app.services.errors import ConflictError
from app.services.unit_of_work import UnitOfWork


def list_destinatari() -> List[Destinatario]:
    with UnitOfWork() as uow:
        return uow.destinatari.list_all_ordered()


def get_destinatario(destinatario_id: int) -> Optional[Destinatario]:
    with UnitOfWork() as uow:
        return uow.destinatari.get_by_id(destinatario_id)


def create_destinatario(payload: DestinatarioPayload) -> Destinatario:
    with UnitOfWork() as uow:
        destinatario = Destinatario()
        payload.apply_to(destinatario)
        uow.destinatari.add(destinatario)
        uow.commit()
        return destinatario


def update_destinatario(destinatario_id: int, payload: DestinatarioPayload) -> Optional[Destinatario]:
    with UnitOfWork() as uow:
        destinatario = uow.destinatari.get_by_id(destinatario_id)
        if destinatario is None:
            return None
        payload.apply_to(destinatario)
        uow.commit()
        return destinatario


def delete_destinatario(destinatario_id: int) -> bool:
    with UnitOfWork() as uow:
        destinatario = uow.destinatari.get_by_id(destinatario_id)
        if destinatario is None:
            return False
        if destinatario.spedizioni:
            raise ConflictError("Destinatario con spedizioni collegate: impossibile eliminarlo")
        uow.destinatari.delete(destinatario)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError("Destinatario in uso: impossibile eliminarlo") from exc
        return True
