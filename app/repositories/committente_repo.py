"""
Repository specifico per Committente.
Eredita le funzioni base (add, get, list) da SqlAlchemyRepository.
"""
from typing import List

from app.models import Committente
from app.repositories.base import SqlAlchemyRepository


class CommittenteRepository(SqlAlchemyRepository[Committente]):
    def __init__(self, session):
        super().__init__(session, Committente)

    def list_all_ordered(self) -> List[Committente]:
        """Restituisce tutti i committenti ordinati per nome."""
        return self.session.query(Committente).order_by(Committente.nome.asc()).all()
