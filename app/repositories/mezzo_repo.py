"""
Repository specifico per Mezzo.
"""
from typing import List, Optional

from app.models import Mezzo
from app.repositories.base import SqlAlchemyRepository


class MezzoRepository(SqlAlchemyRepository[Mezzo]):
    def __init__(self, session):
        super().__init__(session, Mezzo)

    def get_by_targa(self, targa: str) -> Optional[Mezzo]:
        """Cerca un mezzo per targa esatta."""
        if not targa:
            return None
        return self.session.query(Mezzo).filter_by(targa=targa).first()

    def list_all_ordered(self) -> List[Mezzo]:
        return self.session.query(Mezzo).order_by(Mezzo.targa.asc()).all()
