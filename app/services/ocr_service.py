"""
OCR helper per estrarre il testo, pagina per pagina, da DDT in PDF o immagine.
Dipendenze: pypdf (testo nativo PDF), pytesseract + Pillow (OCR immagini),
pdf2image (rasterizzazione dei PDF scansionati).
"""

from __future__ import annotations

import io
from typing import List, Optional

from app.services.settings_service import get_allowed_ddt_mime_types, get_setting


class OcrError(Exception):
    """Errore generico di estrazione testo."""


class OcrDependencyError(OcrError):
    """Dipendenze OCR mancanti o non configurate."""


class UnsupportedMediaTypeError(OcrError):
    """Tipo di file non ammesso dall'import DDT."""


PDF_MIME_TYPE = "application/pdf"
PAGE_BREAK = "\f"


def extract_pages(
    data: bytes,
    media_type: str,
    *,
    lang: Optional[str] = None,
    logger: Optional[object] = None,
) -> List[str]:
    """
    Restituisce il testo grezzo del documento, un blocco per pagina.

    - PDF: testo nativo separato sui salti pagina; se il PDF non ha alcun
      livello testo si ricade sull'OCR pagina per pagina.
    - Immagine: un solo passaggio OCR, un solo blocco.

    Qualsiasi errore di estrazione interrompe l'intera richiesta (OcrError):
    a questo punto non esistono ancora pagine su cui isolarlo.
    """
    normalized = (media_type or "").split(";")[0].strip().lower()
    if normalized not in get_allowed_ddt_mime_types():
        raise UnsupportedMediaTypeError("Tipo di file non supportato. Usa PDF, JPG o PNG")

    lang = lang or get_setting("OCR_LANG", "ita")

    if normalized == PDF_MIME_TYPE:
        return _extract_pdf_pages(data, lang=lang, logger=logger)
    return [_ocr_image_bytes(data, lang=lang)]


def split_pages(raw_text: str) -> List[str]:
    """
    Divide il testo sui salti pagina scartando i segmenti vuoti.

    Se non resta nessun segmento ma il testo grezzo non è vuoto, il testo
    grezzo torna come pagina unica: un documento con testo non sparisce mai.
    """
    pages = [chunk.strip() for chunk in (raw_text or "").split(PAGE_BREAK)]
    pages = [page for page in pages if page]
    if pages:
        return pages
    return [raw_text] if raw_text else []


def _extract_pdf_pages(data: bytes, *, lang: str, logger: Optional[object]) -> List[str]:
    raw_text = _extract_pdf_text_layer(data)
    if raw_text.strip():
        return split_pages(raw_text)

    if logger:
        logger.info(
            "PDF senza livello testo, fallback su OCR",
            extra={"component": "ocr", "bytes": len(data)},
        )
    return _ocr_pdf_pages(data, lang=lang)


def _extract_pdf_text_layer(data: bytes) -> str:
    try:
        from pypdf import PdfReader
    except ImportError as exc:
        raise OcrDependencyError("pypdf non installato") from exc

    try:
        reader = PdfReader(io.BytesIO(data))
        chunks = [(page.extract_text() or "") for page in reader.pages]
    except Exception as exc:
        raise OcrError("Impossibile estrarre testo dal PDF") from exc
    return PAGE_BREAK.join(chunks)


def _ocr_pdf_pages(data: bytes, *, lang: str) -> List[str]:
    pytesseract = _get_pytesseract()
    convert_from_bytes = _get_pdf2image()
    max_pages = int(get_setting("OCR_PDF_MAX_PAGES", 20))

    try:
        images = convert_from_bytes(
            data,
            dpi=300,
            first_page=1,
            last_page=max_pages,
            poppler_path=get_setting("POPPLER_PATH", None),
        )
    except Exception as exc:
        raise OcrError("Impossibile estrarre testo dal PDF") from exc

    chunks: List[str] = []
    for img in images:
        try:
            chunks.append(pytesseract.image_to_string(img, lang=lang) or "")
        except Exception as exc:
            raise OcrError(f"OCR fallito su pagina: {exc}") from exc
    return split_pages(PAGE_BREAK.join(chunks))


def _ocr_image_bytes(data: bytes, *, lang: str) -> str:
    pytesseract = _get_pytesseract()
    try:
        from PIL import Image
    except ImportError as exc:
        raise OcrDependencyError("Pillow non installato") from exc

    try:
        img = Image.open(io.BytesIO(data))
    except Exception as exc:
        raise OcrError("Impossibile estrarre testo dall'immagine") from exc

    try:
        return pytesseract.image_to_string(img, lang=lang) or ""
    except Exception as exc:
        raise OcrError("Impossibile estrarre testo dall'immagine") from exc


def _get_pytesseract():
    try:
        import pytesseract
    except ImportError as exc:
        raise OcrDependencyError("pytesseract non installato") from exc

    tess_cmd = get_setting("TESSERACT_CMD", None)
    if tess_cmd:
        pytesseract.pytesseract.tesseract_cmd = tess_cmd
    return pytesseract


def _get_pdf2image():
    try:
        from pdf2image import convert_from_bytes
    except ImportError as exc:
        raise OcrDependencyError("pdf2image non installato") from exc
    return convert_from_bytes
