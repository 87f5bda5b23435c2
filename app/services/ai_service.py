"""
Estrazione dei campi di un DDT tramite modello linguistico (OpenAI).

Il modello riceve il testo di una sola pagina con un prompt fisso e deve
restituire un unico oggetto JSON. I campi assenti nel testo vengono omessi:
l'estrattore non inventa mai valori.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI
from pydantic import ValidationError

from app.services.dto import DDTData
from app.services.settings_service import get_setting

logger = logging.getLogger(__name__)


class AiExtractionError(Exception):
    """Errore durante l'analisi AI di una pagina DDT."""


DDT_PROMPT_TEMPLATE = """Sei un assistente che estrae dati da documenti di trasporto (DDT).
Analizza il seguente testo estratto da un DDT e restituisci SOLO un oggetto JSON con i seguenti campi (se presenti nel testo, altrimenti omettili):

{{
  "committente": "nome del mittente/committente che affida la spedizione",
  "destinatario": {{
    "ragioneSociale": "nome destinatario",
    "indirizzo": "via e numero civico",
    "cap": "codice postale (5 cifre)",
    "citta": "città",
    "provincia": "sigla provincia (2 lettere maiuscole)"
  }},
  "dataDDT": "data DDT in formato YYYY-MM-DD",
  "numeroDDT": "numero documento",
  "colli": numero_colli (numero intero),
  "peso": peso_kg (numero decimale),
  "contrassegno": importo_contrassegno (numero decimale, se presente)
}}

Regole importanti:
- Restituisci SOLO il JSON, senza testo aggiuntivo
- Se un campo non è presente nel testo, omettilo dal JSON
- Per le date, converti sempre in formato YYYY-MM-DD
- Per CAP, estrai solo le 5 cifre
- Per provincia, estrai solo la sigla di 2 lettere (es: BG, MI, CO)

Testo del DDT:
{ocr_text}"""


_client: Optional[OpenAI] = None


def get_openai_client() -> OpenAI:
    """Client OpenAI condiviso, senza retry automatici."""
    global _client
    if _client is None:
        _client = OpenAI(
            base_url=get_setting("AI_INTEGRATIONS_OPENAI_BASE_URL", None),
            api_key=get_setting("AI_INTEGRATIONS_OPENAI_API_KEY", None),
            max_retries=0,
        )
    return _client


def build_prompt(ocr_text: str) -> str:
    return DDT_PROMPT_TEMPLATE.format(ocr_text=ocr_text)


def parse_ddt_with_ai(ocr_text: str, *, client: Optional[OpenAI] = None) -> Dict[str, Any]:
    """
    Estrae i campi strutturati dal testo di una pagina di DDT.

    Restituisce un dizionario con i soli campi presenti (chiavi come sul filo:
    committente, destinatario{ragioneSociale, indirizzo, cap, citta, provincia},
    dataDDT, numeroDDT, colli, peso, contrassegno). Un dizionario vuoto
    significa che nella pagina non è stato riconosciuto nulla.

    Raises:
        AiExtractionError: chiamata fallita, risposta vuota o JSON non valido.
    """
    client = client or get_openai_client()

    try:
        response = client.chat.completions.create(
            model=get_setting("AI_MODEL", "gpt-5"),
            messages=[{"role": "user", "content": build_prompt(ocr_text)}],
            response_format={"type": "json_object"},
            max_completion_tokens=int(get_setting("AI_MAX_COMPLETION_TOKENS", 2048)),
        )
    except Exception as exc:
        raise AiExtractionError("Impossibile analizzare il DDT con AI") from exc

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise AiExtractionError("Nessuna risposta dal modello AI")

    return parse_ai_response(content)


def parse_ai_response(content: str) -> Dict[str, Any]:
    """Valida la risposta JSON del modello contro lo schema DDTData."""
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        raise AiExtractionError("Risposta AI non in formato JSON") from exc

    if not isinstance(raw, dict):
        raise AiExtractionError("Risposta AI non valida: atteso un oggetto JSON")

    data, dropped = _validate_dropping_invalid(raw)
    if dropped:
        logger.warning(
            "Campi AI non validi scartati",
            extra={"component": "ai", "dropped_fields": dropped},
        )
    return data.to_fields()


def _validate_dropping_invalid(raw: Dict[str, Any]) -> Tuple[DDTData, List[str]]:
    """
    Valida la risposta scartando solo i campi che non rispettano lo schema
    (es. colli 2.5, destinatario come stringa): gli altri campi restano.
    """
    raw = dict(raw)
    if isinstance(raw.get("destinatario"), dict):
        raw["destinatario"] = dict(raw["destinatario"])

    dropped: List[str] = []
    while True:
        try:
            return DDTData.model_validate(raw), dropped
        except ValidationError as exc:
            removed = [path for path in (_remove_path(raw, err["loc"]) for err in exc.errors()) if path]
            if not removed:
                raise AiExtractionError(
                    f"Risposta AI non conforme allo schema: {exc.error_count()} errori"
                ) from exc
            dropped.extend(removed)


def _remove_path(raw: Dict[str, Any], loc) -> Optional[str]:
    """Rimuove il campo indicato da ``loc`` (anche annidato). Restituisce il percorso rimosso."""
    keys = [str(part) for part in loc]
    if not keys:
        return None
    parent = raw
    for key in keys[:-1]:
        child = parent.get(key) if isinstance(parent, dict) else None
        if not isinstance(child, dict):
            break
        parent = child
    else:
        if isinstance(parent, dict) and keys[-1] in parent:
            del parent[keys[-1]]
            return ".".join(keys)
        return None
    # Percorso non navigabile: si scarta il campo di primo livello
    if keys[0] in raw:
        del raw[keys[0]]
        return keys[0]
    return None
