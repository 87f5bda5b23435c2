"""
Risposte JSON comuni delle API: {success, message, payload}.
"""

from __future__ import annotations

from typing import Any

from flask import jsonify, request
from pydantic import BaseModel, ValidationError

from .serializers import validation_errors


def ok(payload: Any = None, message: str = "", status: int = 200):
    return jsonify({"success": True, "message": message, "payload": payload}), status


def fail(message: str, status: int = 400, payload: Any = None):
    return jsonify({"success": False, "message": message, "payload": payload}), status


def parse_body(schema: type[BaseModel]):
    """
    Valida il body JSON con lo schema pydantic.

    Restituisce (payload, None) oppure (None, risposta 400 con gli errori per campo).
    """
    data = request.get_json(silent=True) or {}
    try:
        return schema.model_validate(data), None
    except ValidationError as exc:
        return None, fail("Dati non validi.", 400, {"errors": validation_errors(exc)})
