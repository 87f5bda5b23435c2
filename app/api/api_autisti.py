from __future__ import annotations

from flask import Blueprint

from app.services.autista_service import (
    create_autista,
    delete_autista,
    list_autisti,
    update_autista,
)
from app.services.dto import AutistaPayload
from app.services.errors import ConflictError

from .helpers import fail, ok, parse_body
from .serializers import autista_to_dict

api_autisti_bp = Blueprint("api_autisti", __name__)


@api_autisti_bp.route("/", methods=["GET"])
def api_list_autisti():
    return ok([autista_to_dict(a) for a in list_autisti()])


@api_autisti_bp.route("/", methods=["POST"])
def api_create_autista():
    payload, error = parse_body(AutistaPayload)
    if error:
        return error
    return ok(autista_to_dict(create_autista(payload)), "Autista creato.", 201)


@api_autisti_bp.route("/<int:autista_id>", methods=["PUT"])
def api_update_autista(autista_id: int):
    payload, error = parse_body(AutistaPayload)
    if error:
        return error
    autista = update_autista(autista_id, payload)
    if autista is None:
        return fail("Autista non trovato.", 404)
    return ok(autista_to_dict(autista), "Autista aggiornato.")


@api_autisti_bp.route("/<int:autista_id>", methods=["DELETE"])
def api_delete_autista(autista_id: int):
    try:
        deleted = delete_autista(autista_id)
    except ConflictError as exc:
        return fail(str(exc), 409)
    if not deleted:
        return fail("Autista non trovato.", 404)
    return ok(None, "Autista eliminato.")
