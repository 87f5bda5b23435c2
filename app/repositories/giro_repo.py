"""
Repository specifico per Giro.
Gestisce le query sui giri con autista/mezzo caricati in join.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import joinedload, selectinload

from app.models import Giro
from app.repositories.base import SqlAlchemyRepository


class GiroRepository(SqlAlchemyRepository[Giro]):
    def __init__(self, session):
        super().__init__(session, Giro)

    def get_with_details(self, giro_id: int) -> Optional[Giro]:
        """Giro con autista, mezzo e spedizioni assegnate."""
        return (
            self.session.query(Giro)
            .options(
                joinedload(Giro.autista),
                joinedload(Giro.mezzo),
                selectinload(Giro.spedizioni),
            )
            .filter(Giro.id == giro_id)
            .first()
        )

    def list_by_data(self, data: date) -> List[Giro]:
        return (
            self.session.query(Giro)
            .options(joinedload(Giro.autista), joinedload(Giro.mezzo))
            .filter(Giro.data == data)
            .order_by(Giro.turno.asc(), Giro.id.asc())
            .all()
        )

    def count_by_data(self, data: date) -> int:
        return self.session.query(Giro).filter(Giro.data == data).count()
