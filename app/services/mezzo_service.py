"""
Servizi per la gestione dei mezzi (la targa è univoca).
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.models import Mezzo
from app.services.dto import MezzoPayload
from app.services.errors import ConflictError
from app.services.unit_of_work import UnitOfWork


def list_mezzi() -> List[Mezzo]:
    with UnitOfWork() as uow:
        return uow.mezzi.list_all_ordered()


def create_mezzo(payload: MezzoPayload) -> Mezzo:
    with UnitOfWork() as uow:
        if uow.mezzi.get_by_targa(payload.targa) is not None:
            raise ConflictError(f"Targa {payload.targa} già presente")
        mezzo = Mezzo()
        payload.apply_to(mezzo)
        uow.mezzi.add(mezzo)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError(f"Targa {payload.targa} già presente") from exc
        return mezzo


def update_mezzo(mezzo_id: int, payload: MezzoPayload) -> Optional[Mezzo]:
    with UnitOfWork() as uow:
        mezzo = uow.mezzi.get_by_id(mezzo_id)
        if mezzo is None:
            return None
        existing = uow.mezzi.get_by_targa(payload.targa)
        if existing is not None and existing.id != mezzo.id:
            raise ConflictError(f"Targa {payload.targa} già presente")
        payload.apply_to(mezzo)
        uow.commit()
        return mezzo


def delete_mezzo(mezzo_id: int) -> bool:
    with UnitOfWork() as uow:
        mezzo = uow.mezzi.get_by_id(mezzo_id)
        if mezzo is None:
            return False
        if mezzo.giri:
            raise ConflictError("Mezzo assegnato a uno o più giri: impossibile eliminarlo")
        uow.mezzi.delete(mezzo)
        try:
            uow.commit()
        except IntegrityError as exc:
            raise ConflictError("Mezzo in uso: impossibile eliminarlo") from exc
        return True
