"""
API JSON per i giri di consegna (tabellone pianificazione).

GET    /api/giri/by-date/<YYYY-MM-DD>   giri della giornata
GET    /api/giri/<id>                   giro con autista, mezzo e spedizioni
POST   /api/giri/                       crea
DELETE /api/giri/<id>                   elimina; le spedizioni tornano INSERITA
"""

from __future__ import annotations

from datetime import datetime

from flask import Blueprint

from app.services.dto import GiroPayload
from app.services.giro_service import (
    create_giro,
    delete_giro,
    get_giro_detail,
    list_giri_by_data,
)

from .helpers import fail, ok, parse_body
from .serializers import giro_to_dict

api_giri_bp = Blueprint("api_giri", __name__)


@api_giri_bp.route("/by-date/<string:day>", methods=["GET"])
def api_list_giri_by_date(day: str):
    try:
        data = datetime.strptime(day, "%Y-%m-%d").date()
    except ValueError:
        return fail("Data non valida (atteso YYYY-MM-DD).", 400)
    return ok([giro_to_dict(g) for g in list_giri_by_data(data)])


@api_giri_bp.route("/<int:giro_id>", methods=["GET"])
def api_get_giro(giro_id: int):
    giro = get_giro_detail(giro_id)
    if giro is None:
        return fail("Giro non trovato.", 404)
    return ok(giro_to_dict(giro, with_spedizioni=True))


@api_giri_bp.route("/", methods=["POST"])
def api_create_giro():
    payload, error = parse_body(GiroPayload)
    if error:
        return error
    try:
        giro = create_giro(payload)
    except ValueError as exc:
        return fail(str(exc), 400)
    return ok(giro_to_dict(giro), "Giro creato.", 201)


@api_giri_bp.route("/<int:giro_id>", methods=["DELETE"])
def api_delete_giro(giro_id: int):
    if not delete_giro(giro_id):
        return fail("Giro non trovato.", 404)
    return ok(None, "Giro eliminato.")
