"""DTO e helper per i filtri del riepilogo committenti."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional


@dataclass
class SummaryFilters:
    committente_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @staticmethod
    def _parse_date(value: str) -> Optional[date]:
        if not value:
            return None
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            return None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        # "ALL" è il valore del filtro "tutti i committenti"
        if value in (None, "", "ALL"):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_query_args(cls, args: Mapping[str, Any]) -> "SummaryFilters":
        return cls(
            committente_id=cls._parse_int(args.get("committenteId")),
            date_from=cls._parse_date(args.get("dateFrom", "")),
            date_to=cls._parse_date(args.get("dateTo", "")),
        )
