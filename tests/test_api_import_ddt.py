"""
Test dell'endpoint di import DDT.
"""

import io

from app.services import ai_service, ocr_service
from app.services.ocr_service import OcrError


def _upload(client, content=b"%PDF-1.4", filename="ddt.pdf", mimetype="application/pdf"):
    return client.post(
        "/api/import-ddt/",
        data={"file": (io.BytesIO(content), filename, mimetype)},
        content_type="multipart/form-data",
    )


def _assert_manual_entry(response, status):
    assert response.status_code == status
    body = response.get_json()
    assert body["success"] is False
    assert body["manualEntryAvailable"] is True
    assert body["error"]


def test_missing_file(client):
    response = client.post("/api/import-ddt/", data={}, content_type="multipart/form-data")
    _assert_manual_entry(response, 400)


def test_unsupported_type(client):
    _assert_manual_entry(_upload(client, b"ciao", "note.txt", "text/plain"), 415)


def test_too_large(app, client):
    app.config["DDT_IMPORT_MAX_BYTES"] = 10
    _assert_manual_entry(_upload(client, b"x" * 20), 413)


def test_no_extractable_text(client, monkeypatch):
    monkeypatch.setattr(ocr_service, "extract_pages", lambda data, media_type, logger=None: [])
    _assert_manual_entry(_upload(client), 400)


def test_extraction_failure(client, monkeypatch):
    def _fail(data, media_type, logger=None):
        raise OcrError("Impossibile estrarre testo dal PDF")

    monkeypatch.setattr(ocr_service, "extract_pages", _fail)
    _assert_manual_entry(_upload(client), 500)


def test_unexpected_failure(client, monkeypatch):
    def _fail(data, media_type, logger=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(ocr_service, "extract_pages", _fail)
    _assert_manual_entry(_upload(client), 500)


def test_successful_import(client, make_committente, make_destinatario, monkeypatch):
    committente = make_committente("Cati")
    destinatario = make_destinatario("Delta Store", "Bergamo")
    committente_id, destinatario_id = committente.id, destinatario.id

    monkeypatch.setattr(
        ocr_service, "extract_pages", lambda data, media_type, logger=None: ["prima pagina", "seconda pagina"]
    )

    def _fields(text):
        if text == "prima pagina":
            return {
                "committente": "Cati S.p.A.",
                "destinatario": {"ragioneSociale": "DELTA STORE", "citta": "bergamo"},
                "numeroDDT": "77",
            }
        raise ai_service.AiExtractionError("Risposta AI non in formato JSON")

    monkeypatch.setattr(ai_service, "parse_ddt_with_ai", _fields)

    response = _upload(client, b"\x89PNG", "ddt.png", "image/png")

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["summary"] == {"totalPages": 2, "processedPages": 2, "pagesWithErrors": 1}
    first, second = body["candidates"]
    assert first["pageNumber"] == 1
    assert first["data"]["committenteId"] == committente_id
    assert first["data"]["destinatarioId"] == destinatario_id
    assert first["metadata"] == {
        "committenteMapped": True,
        "destinatarioMapped": True,
        "destinatarioCreated": False,
    }
    assert second == {"pageNumber": 2, "error": "Nessun dato riconosciuto"}
