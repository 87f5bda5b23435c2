"""
Login con le credenziali salvate in tabella users.
"""

from __future__ import annotations

from flask import Blueprint, current_app, request

from app.services.auth_service import authenticate

from .helpers import fail, ok

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.route("/login", methods=["POST"])
def api_login():
    data = request.get_json(silent=True) or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    if not username or not password:
        return fail("Username e password obbligatori.", 400)

    user = authenticate(username, password)
    if user is None:
        current_app.logger.info(
            "Login fallito",
            extra={"component": "auth", "username": username},
        )
        return fail("Credenziali non valide.", 401)

    return ok({"user": {"id": user.id, "username": user.username}}, "Login effettuato.")
