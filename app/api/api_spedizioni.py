"""
API JSON per le spedizioni.

GET   /api/spedizioni/               elenco con committente e destinatario
POST  /api/spedizioni/               crea; il numero spedizione è assegnato qui
PUT   /api/spedizioni/<id>/assign    {"giroId": 12 | null}
PATCH /api/spedizioni/<id>/stato     {"stato": "IN_CONSEGNA"}
"""

from __future__ import annotations

from flask import Blueprint, current_app

from app.services.dto import AssignPayload, SpedizionePayload, StatoPayload
from app.services.errors import ConflictError
from app.services.spedizione_service import (
    assign_spedizione,
    create_spedizione,
    list_spedizioni,
    update_spedizione_stato,
)

from .helpers import fail, ok, parse_body
from .serializers import spedizione_to_dict

api_spedizioni_bp = Blueprint("api_spedizioni", __name__)


@api_spedizioni_bp.route("/", methods=["GET"])
def api_list_spedizioni():
    return ok([spedizione_to_dict(s) for s in list_spedizioni()])


@api_spedizioni_bp.route("/", methods=["POST"])
def api_create_spedizione():
    payload, error = parse_body(SpedizionePayload)
    if error:
        return error

    try:
        spedizione = create_spedizione(payload)
    except ValueError as exc:
        return fail(str(exc), 400)
    except ConflictError as exc:
        current_app.logger.warning(
            "Creazione spedizione in conflitto",
            extra={"component": "spedizioni", "numero_ddt": payload.numero_ddt},
        )
        return fail(str(exc), 409)

    return ok(spedizione_to_dict(spedizione, with_relations=False), "Spedizione creata.", 201)


@api_spedizioni_bp.route("/<int:spedizione_id>/assign", methods=["PUT"])
def api_assign_spedizione(spedizione_id: int):
    payload, error = parse_body(AssignPayload)
    if error:
        return error
    try:
        spedizione = assign_spedizione(spedizione_id, payload.giro_id)
    except ValueError as exc:
        return fail(str(exc), 400)
    if spedizione is None:
        return fail("Spedizione non trovata.", 404)
    return ok(spedizione_to_dict(spedizione, with_relations=False))


@api_spedizioni_bp.route("/<int:spedizione_id>/stato", methods=["PATCH"])
def api_update_stato(spedizione_id: int):
    payload, error = parse_body(StatoPayload)
    if error:
        return error
    spedizione = update_spedizione_stato(spedizione_id, payload.stato)
    if spedizione is None:
        return fail("Spedizione non trovata.", 404)
    return ok(spedizione_to_dict(spedizione, with_relations=False))
