"""
Riepilogo spedizioni per committente.

GET /api/riepilogo-committenti/?committenteId=&dateFrom=&dateTo=
    righe filtrate + totali {count, colli, peso}
GET /api/riepilogo-committenti/export
    stesse righe in CSV (separatore ';')
"""

from __future__ import annotations

from flask import Blueprint, Response, request

from app.services.dto import SummaryFilters
from app.services.reporting_service import export_summary_csv, get_committente_summary

from .helpers import ok
from .serializers import spedizione_to_dict

api_riepilogo_bp = Blueprint("api_riepilogo", __name__)


@api_riepilogo_bp.route("/", methods=["GET"])
def api_riepilogo():
    filters = SummaryFilters.from_query_args(request.args)
    summary = get_committente_summary(filters)
    return ok(
        {
            "spedizioni": [spedizione_to_dict(s) for s in summary.spedizioni],
            "totals": summary.totals(),
        }
    )


@api_riepilogo_bp.route("/export", methods=["GET"])
def api_riepilogo_export():
    filters = SummaryFilters.from_query_args(request.args)
    csv_data = export_summary_csv(filters)

    filename = "riepilogo-committenti.csv"
    return Response(
        csv_data,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
