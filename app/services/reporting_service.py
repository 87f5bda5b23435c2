"""
Riepilogo spedizioni per committente (controllo e fatturazione).
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from app.models import Spedizione
from app.services.dto import SummaryFilters
from app.services.formatting_service import format_amount, format_date_it
from app.services.unit_of_work import UnitOfWork

CSV_HEADER = ["Data DDT", "Numero DDT", "Committente", "Destinatario", "Colli", "Peso (kg)", "Stato"]


@dataclass
class CommittenteSummary:
    spedizioni: List[Spedizione] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.spedizioni)

    @property
    def colli(self) -> int:
        return sum(s.colli or 0 for s in self.spedizioni)

    @property
    def peso(self) -> Decimal:
        return sum((Decimal(s.peso_kg or 0) for s in self.spedizioni), Decimal("0"))

    def totals(self) -> dict:
        return {"count": self.count, "colli": self.colli, "peso": float(self.peso)}


def get_committente_summary(filters: SummaryFilters) -> CommittenteSummary:
    with UnitOfWork() as uow:
        rows = uow.spedizioni.search_for_summary(
            committente_id=filters.committente_id,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
    return CommittenteSummary(spedizioni=rows)


def export_summary_csv(filters: SummaryFilters) -> str:
    """CSV separato da ';' con le righe del riepilogo filtrato."""
    summary = get_committente_summary(filters)

    output = io.StringIO()
    writer = csv.writer(output, delimiter=";")
    writer.writerow(CSV_HEADER)

    for spedizione in summary.spedizioni:
        committente = spedizione.committente.nome if spedizione.committente else ""
        destinatario = ""
        if spedizione.destinatario:
            destinatario = f"{spedizione.destinatario.ragione_sociale} - {spedizione.destinatario.citta}"
        writer.writerow([
            format_date_it(spedizione.data_ddt),
            spedizione.numero_ddt or "",
            committente,
            destinatario,
            spedizione.colli,
            format_amount(spedizione.peso_kg),
            spedizione.stato or "",
        ])

    csv_data = output.getvalue()
    output.close()
    return csv_data
