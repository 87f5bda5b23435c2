"""
Pacchetto principale dell'applicazione Flask (gestionale trasporti).
"""

from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from config import DevConfig
from .extensions import init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    init_extensions(app)

    _register_blueprints(app)
    _register_error_handlers(app)

    app.logger.info("Applicazione Flask inizializzata.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    from .api import (
        api_auth_bp,
        api_stats_bp,
        api_committenti_bp,
        api_destinatari_bp,
        api_autisti_bp,
        api_mezzi_bp,
        api_giri_bp,
        api_spedizioni_bp,
        api_import_ddt_bp,
        api_riepilogo_bp,
    )

    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(api_stats_bp, url_prefix="/api/stats")
    app.register_blueprint(api_committenti_bp, url_prefix="/api/committenti")
    app.register_blueprint(api_destinatari_bp, url_prefix="/api/destinatari")
    app.register_blueprint(api_autisti_bp, url_prefix="/api/autisti")
    app.register_blueprint(api_mezzi_bp, url_prefix="/api/mezzi")
    app.register_blueprint(api_giri_bp, url_prefix="/api/giri")
    app.register_blueprint(api_spedizioni_bp, url_prefix="/api/spedizioni")
    app.register_blueprint(api_import_ddt_bp, url_prefix="/api/import-ddt")
    app.register_blueprint(api_riepilogo_bp, url_prefix="/api/riepilogo-committenti")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(exc):
        # Il body dell'import segnala che resta possibile l'inserimento manuale
        app.logger.warning(
            "Upload rifiutato: dimensione oltre il limite",
            extra={"component": "upload", "path": request.path},
        )
        return jsonify(
            {
                "success": False,
                "error": "File troppo grande. Dimensione massima 25 MB.",
                "manualEntryAvailable": True,
            }
        ), 413
