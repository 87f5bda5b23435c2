"""
Repository specifico per Destinatario.
"""
from typing import List

from app.models import Destinatario
from app.repositories.base import SqlAlchemyRepository


class DestinatarioRepository(SqlAlchemyRepository[Destinatario]):
    def __init__(self, session):
        super().__init__(session, Destinatario)

    def list_all_ordered(self) -> List[Destinatario]:
        """Restituisce tutti i destinatari ordinati per ragione sociale."""
        return (
            self.session.query(Destinatario)
            .order_by(Destinatario.ragione_sociale.asc())
            .all()
        )
