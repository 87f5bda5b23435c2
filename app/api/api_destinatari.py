"""
API JSON per i destinatari.
"""

from __future__ import annotations

from flask import Blueprint

from app.services.destinatario_service import (
    create_destinatario,
    delete_destinatario,
    get_destinatario,
    list_destinatari,
    update_destinatario,
)
from app.services.dto import DestinatarioPayload
from app.services.errors import ConflictError

from .helpers import fail, ok, parse_body
from .serializers import destinatario_to_dict

api_destinatari_bp = Blueprint("api_destinatari", __name__)


@api_destinatari_bp.route("/", methods=["GET"])
def api_list_destinatari():
    return ok([destinatario_to_dict(d) for d in list_destinatari()])


@api_destinatari_bp.route("/", methods=["POST"])
def api_create_destinatario():
    payload, error = parse_body(DestinatarioPayload)
    if error:
        return error
    return ok(destinatario_to_dict(create_destinatario(payload)), "Destinatario creato.", 201)


@api_destinatari_bp.route("/<int:destinatario_id>", methods=["GET"])
def api_get_destinatario(destinatario_id: int):
    destinatario = get_destinatario(destinatario_id)
    if destinatario is None:
        return fail("Destinatario non trovato.", 404)
    return ok(destinatario_to_dict(destinatario))


@api_destinatari_bp.route("/<int:destinatario_id>", methods=["PUT"])
def api_update_destinatario(destinatario_id: int):
    payload, error = parse_body(DestinatarioPayload)
    if error:
        return error
    destinatario = update_destinatario(destinatario_id, payload)
    if destinatario is None:
        return fail("Destinatario non trovato.", 404)
    return ok(destinatario_to_dict(destinatario), "Destinatario aggiornato.")


@api_destinatari_bp.route("/<int:destinatario_id>", methods=["DELETE"])
def api_delete_destinatario(destinatario_id: int):
    try:
        deleted = delete_destinatario(destinatario_id)
    except ConflictError as exc:
        return fail(str(exc), 409)
    if not deleted:
        return fail("Destinatario non trovato.", 404)
    return ok(None, "Destinatario eliminato.")
