#!/usr/bin/env python3
"""
Script di avvio per l'applicazione Flask gestionale trasporti.

Uso:
    python manage.py runserver                     # Avvia il server di sviluppo
    python manage.py create-db                     # Crea le tabelle del database MySQL
    python manage.py seed                          # Crea l'utente d'ufficio di default
    python manage.py import-ddt FILE [--confirm-all]
                                                   # Import DDT da riga di comando
"""

import argparse
import json
import logging
import mimetypes
import os

from sqlalchemy.exc import OperationalError as SAOperationalError
from pymysql.err import OperationalError as MySQLOperationalError

from app import create_app
from app.extensions import db
from config import DevConfig

# ---------------------------------------------------------------------
# Logger CLI (fuori dal contesto Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


# ---------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Assicura che tutti i modelli siano registrati prima di create_all()."""
    import app.models  # noqa: F401


def _guess_media_type(path: str) -> str:
    media_type, _ = mimetypes.guess_type(path)
    return media_type or "application/octet-stream"


# ---------------------------------------------------------------------
# Comandi
# ---------------------------------------------------------------------
def create_db(app) -> None:
    """Crea tutte le tabelle del database definite nei modelli SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Tentativo di creare tutte le tabelle nel database...")
        try:
            _import_all_models()
            db.create_all()
            cli_logger.info("Database creato con successo.")
        except (SAOperationalError, MySQLOperationalError) as e:
            cli_logger.error("Errore di connessione o permessi MySQL: %s", e)
            cli_logger.info(
                "Verifica che MySQL sia attivo e che l'utente '%s' abbia accesso al DB '%s'.",
                app.config.get("DB_USER"),
                app.config.get("DB_NAME"),
            )


def seed(app) -> None:
    from app.services.auth_service import ensure_default_user

    with app.app_context():
        if ensure_default_user():
            cli_logger.info(
                "Utente di default creato (username: %s).",
                app.config.get("DEFAULT_USERNAME"),
            )
        else:
            cli_logger.info("Utente di default già presente.")


def import_ddt_file(app, path: str, confirm_all: bool = False) -> int:
    """
    Esegue l'import di un DDT da file e stampa i candidati in JSON.
    Con --confirm-all salva le spedizioni dei candidati completi.
    Restituisce il codice di uscita.
    """
    from app.services.ddt_import_service import NoTextExtractedError, import_ddt
    from app.services.ddt_review_service import ImportReview
    from app.services.ocr_service import OcrError

    with open(path, "rb") as fh:
        data = fh.read()

    with app.app_context():
        try:
            result = import_ddt(data, _guess_media_type(path))
        except (OcrError, NoTextExtractedError) as e:
            cli_logger.error("Import DDT fallito: %s", e)
            return 1

        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2, default=str))

        if confirm_all:
            review = ImportReview(result.candidates)
            saved = review.confirm_all()
            cli_logger.info("Spedizioni salvate: %s", saved)
            for candidate in review.pending:
                cli_logger.info(
                    "Pagina %s da completare a mano: %s",
                    candidate.page_number,
                    candidate.error or "committente/destinatario non risolti",
                )
    return 0


def run_server(app) -> None:
    """Avvia il server di sviluppo Flask (LAN-ready)."""
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Avvio del server su http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        description="Gestione dell'applicazione Flask gestionale trasporti."
    )
    parser.add_argument(
        "command",
        choices=["runserver", "create-db", "seed", "import-ddt"],
        help="Comando da eseguire.",
    )
    parser.add_argument("path", nargs="?", help="File DDT (solo per import-ddt).")
    parser.add_argument(
        "--confirm-all",
        action="store_true",
        help="Salva subito le spedizioni dei candidati completi (import-ddt).",
    )

    args = parser.parse_args()

    # Crea l'app con configurazione di sviluppo
    app = create_app(DevConfig)

    if args.command == "runserver":
        run_server(app)
    elif args.command == "create-db":
        create_db(app)
    elif args.command == "seed":
        seed(app)
    elif args.command == "import-ddt":
        if not args.path:
            parser.error("import-ddt richiede il percorso del file")
        raise SystemExit(import_ddt_file(app, args.path, confirm_all=args.confirm_all))


if __name__ == "__main__":
    main()
