"""
API JSON per i mezzi. La targa è univoca: un duplicato risponde 409.
"""

from __future__ import annotations

from flask import Blueprint

from app.services.dto import MezzoPayload
from app.services.errors import ConflictError
from app.services.mezzo_service import (
    create_mezzo,
    delete_mezzo,
    list_mezzi,
    update_mezzo,
)

from .helpers import fail, ok, parse_body
from .serializers import mezzo_to_dict

api_mezzi_bp = Blueprint("api_mezzi", __name__)


@api_mezzi_bp.route("/", methods=["GET"])
def api_list_mezzi():
    return ok([mezzo_to_dict(m) for m in list_mezzi()])


@api_mezzi_bp.route("/", methods=["POST"])
def api_create_mezzo():
    payload, error = parse_body(MezzoPayload)
    if error:
        return error
    try:
        mezzo = create_mezzo(payload)
    except ConflictError as exc:
        return fail(str(exc), 409)
    return ok(mezzo_to_dict(mezzo), "Mezzo creato.", 201)


@api_mezzi_bp.route("/<int:mezzo_id>", methods=["PUT"])
def api_update_mezzo(mezzo_id: int):
    payload, error = parse_body(MezzoPayload)
    if error:
        return error
    try:
        mezzo = update_mezzo(mezzo_id, payload)
    except ConflictError as exc:
        return fail(str(exc), 409)
    if mezzo is None:
        return fail("Mezzo non trovato.", 404)
    return ok(mezzo_to_dict(mezzo), "Mezzo aggiornato.")


@api_mezzi_bp.route("/<int:mezzo_id>", methods=["DELETE"])
def api_delete_mezzo(mezzo_id: int):
    try:
        deleted = delete_mezzo(mezzo_id)
    except ConflictError as exc:
        return fail(str(exc), 409)
    if not deleted:
        return fail("Mezzo non trovato.", 404)
    return ok(None, "Mezzo eliminato.")
