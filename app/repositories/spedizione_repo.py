"""
Repository specifico per Spedizione.
Gestisce numerazione progressiva, filtri per riepilogo e contatori dashboard.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from app.models import Giro, Spedizione
from app.repositories.base import SqlAlchemyRepository


class SpedizioneRepository(SqlAlchemyRepository[Spedizione]):
    def __init__(self, session):
        super().__init__(session, Spedizione)

    def next_numero_spedizione(self) -> int:
        """
        Prossimo numero progressivo: MAX(numero_spedizione) + 1.

        Va chiamato nella stessa transazione dell'inserimento; il vincolo
        UNIQUE sul numero intercetta eventuali inserimenti concorrenti.
        """
        current_max = self.session.query(
            func.coalesce(func.max(Spedizione.numero_spedizione), 0)
        ).scalar()
        return int(current_max or 0) + 1

    def list_for_ui(self) -> List[Spedizione]:
        """Tutte le spedizioni con committente/destinatario, per numero."""
        return (
            self.session.query(Spedizione)
            .options(
                joinedload(Spedizione.committente),
                joinedload(Spedizione.destinatario),
            )
            .order_by(Spedizione.numero_spedizione.asc())
            .all()
        )

    def list_by_giro(self, giro_id: int) -> List[Spedizione]:
        return (
            self.session.query(Spedizione)
            .filter(Spedizione.giro_id == giro_id)
            .order_by(Spedizione.numero_spedizione.asc())
            .all()
        )

    def search_for_summary(
        self,
        committente_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Spedizione]:
        """
        Spedizioni per il riepilogo committenti (fatturazione).
        Ordinate per data DDT decrescente.
        """
        query = self.session.query(Spedizione).options(
            joinedload(Spedizione.committente),
            joinedload(Spedizione.destinatario),
        )
        if committente_id:
            query = query.filter(Spedizione.committente_id == committente_id)
        if date_from:
            query = query.filter(Spedizione.data_ddt >= date_from)
        if date_to:
            query = query.filter(Spedizione.data_ddt <= date_to)
        return query.order_by(
            Spedizione.data_ddt.desc(), Spedizione.numero_spedizione.desc()
        ).all()

    def count_by_stato(self, stato: str) -> int:
        return self.session.query(Spedizione).filter(Spedizione.stato == stato).count()

    def count_by_stato_and_giro_data(self, stato: str, data: date) -> int:
        return (
            self.session.query(Spedizione)
            .join(Giro, Spedizione.giro_id == Giro.id)
            .filter(Spedizione.stato == stato, Giro.data == data)
            .count()
        )

    def unassign_giro(self, giro_id: int) -> int:
        """Rimuove il giro dalle spedizioni e le riporta a INSERITA."""
        spedizioni = self.list_by_giro(giro_id)
        for spedizione in spedizioni:
            spedizione.giro_id = None
            spedizione.stato = "INSERITA"
        return len(spedizioni)
