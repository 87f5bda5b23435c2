from __future__ import annotations

from flask import Blueprint

from app.services.stats_service import get_stats

from .helpers import ok

api_stats_bp = Blueprint("api_stats", __name__)


@api_stats_bp.route("/", methods=["GET"])
def api_get_stats():
    """Contatori della dashboard."""
    return ok(get_stats())
