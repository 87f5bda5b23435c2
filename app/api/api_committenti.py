"""
API JSON per i committenti.

GET    /api/committenti/          elenco ordinato per nome
POST   /api/committenti/          crea
GET    /api/committenti/<id>      dettaglio
PUT    /api/committenti/<id>      aggiorna
DELETE /api/committenti/<id>      elimina (409 se ha spedizioni)
"""

from __future__ import annotations

from flask import Blueprint

from app.services.committente_service import (
    create_committente,
    delete_committente,
    get_committente,
    list_committenti,
    update_committente,
)
from app.services.dto import CommittentePayload
from app.services.errors import ConflictError

from .helpers import fail, ok, parse_body
from .serializers import committente_to_dict

api_committenti_bp = Blueprint("api_committenti", __name__)


@api_committenti_bp.route("/", methods=["GET"])
def api_list_committenti():
    return ok([committente_to_dict(c) for c in list_committenti()])


@api_committenti_bp.route("/", methods=["POST"])
def api_create_committente():
    payload, error = parse_body(CommittentePayload)
    if error:
        return error
    committente = create_committente(payload)
    return ok(committente_to_dict(committente), "Committente creato.", 201)


@api_committenti_bp.route("/<int:committente_id>", methods=["GET"])
def api_get_committente(committente_id: int):
    committente = get_committente(committente_id)
    if committente is None:
        return fail("Committente non trovato.", 404)
    return ok(committente_to_dict(committente))


@api_committenti_bp.route("/<int:committente_id>", methods=["PUT"])
def api_update_committente(committente_id: int):
    payload, error = parse_body(CommittentePayload)
    if error:
        return error
    committente = update_committente(committente_id, payload)
    if committente is None:
        return fail("Committente non trovato.", 404)
    return ok(committente_to_dict(committente), "Committente aggiornato.")


@api_committenti_bp.route("/<int:committente_id>", methods=["DELETE"])
def api_delete_committente(committente_id: int):
    try:
        deleted = delete_committente(committente_id)
    except ConflictError as exc:
        return fail(str(exc), 409)
    if not deleted:
        return fail("Committente non trovato.", 404)
    return ok(None, "Committente eliminato.")
