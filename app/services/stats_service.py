"""
Contatori della dashboard.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from app.services.unit_of_work import UnitOfWork


def get_stats(today: Optional[date] = None) -> Dict[str, int]:
    today = today or date.today()
    with UnitOfWork() as uow:
        return {
            "spedizioniDaAssegnare": uow.spedizioni.count_by_stato("INSERITA"),
            "giriOggi": uow.giri.count_by_data(today),
            "inConsegna": uow.spedizioni.count_by_stato("IN_CONSEGNA"),
            "consegnateOggi": uow.spedizioni.count_by_stato_and_giro_data("CONSEGNATA", today),
        }
