"""
Repository specifico per Autista.
"""
from typing import List

from app.models import Autista
from app.repositories.base import SqlAlchemyRepository


class AutistaRepository(SqlAlchemyRepository[Autista]):
    def __init__(self, session):
        super().__init__(session, Autista)

    def list_all_ordered(self) -> List[Autista]:
        return (
            self.session.query(Autista)
            .order_by(Autista.cognome.asc(), Autista.nome.asc())
            .all()
        )
