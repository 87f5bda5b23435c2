"""
Import DDT da file (PDF, JPG, PNG).

POST /api/import-ddt/   multipart, campo "file"

Risposta 200:
{
  "success": true,
  "candidates": [{"pageNumber": 1, "data": {...}, "metadata": {...}}, ...],
  "summary": {"totalPages": 3, "processedPages": 3, "pagesWithErrors": 1}
}

Gli errori hanno sempre la forma {"success": false, "error": "...",
"manualEntryAvailable": true}: l'operatore può comunque inserire a mano.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from app.services.ddt_import_service import NoTextExtractedError, import_ddt
from app.services.ocr_service import OcrError, UnsupportedMediaTypeError
from app.services.settings_service import get_allowed_ddt_mime_types, get_ddt_import_max_bytes

api_import_ddt_bp = Blueprint("api_import_ddt", __name__)

UNSUPPORTED_TYPE_MESSAGE = "Tipo di file non supportato. Usa PDF, JPG o PNG"


def _import_error(message: str, status: int):
    return jsonify({"success": False, "error": message, "manualEntryAvailable": True}), status


@api_import_ddt_bp.route("/", methods=["POST"])
def api_import_ddt():
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        return _import_error("Nessun file caricato", 400)

    media_type = (upload.mimetype or "").lower()
    if media_type not in get_allowed_ddt_mime_types():
        return _import_error(UNSUPPORTED_TYPE_MESSAGE, 415)

    data = upload.read()
    if len(data) > get_ddt_import_max_bytes():
        return _import_error("File troppo grande. Dimensione massima 25 MB.", 413)
    if not data:
        return _import_error("Il file caricato è vuoto", 400)

    current_app.logger.info(
        "Import DDT avviato",
        extra={
            "component": "ddt_import",
            "upload_name": upload.filename,
            "media_type": media_type,
            "bytes": len(data),
        },
    )

    try:
        result = import_ddt(data, media_type)
    except UnsupportedMediaTypeError:
        return _import_error(UNSUPPORTED_TYPE_MESSAGE, 415)
    except NoTextExtractedError:
        return _import_error("Nessun testo estratto dal documento", 400)
    except OcrError as exc:
        current_app.logger.error(
            "Estrazione testo DDT fallita",
            extra={"component": "ddt_import", "error": str(exc)},
        )
        return _import_error("Errore durante l'estrazione del testo dal documento", 500)
    except Exception:
        current_app.logger.exception(
            "Errore imprevisto durante l'import DDT",
            extra={"component": "ddt_import"},
        )
        return _import_error("Errore durante l'elaborazione del documento", 500)

    return jsonify(result.to_dict()), 200
