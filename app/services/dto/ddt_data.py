"""
Schema dei campi che il modello AI estrae da una pagina di DDT.

Ogni campo è opzionale: un campo assente nel testo resta assente
nell'output, mai sostituito da un default.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%d.%m.%Y", "%d/%m/%y")
NUMBER_REGEX = re.compile(r"\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:[.,]\d+)?")
THOUSANDS_REGEX = re.compile(r"\d{1,3}(?:\.\d{3})+")
PROVINCIA_REGEX = re.compile(r"\b[A-Za-z]{2}\b")


def _clean_str(value):
    if value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _parse_number(raw: str) -> Optional[str]:
    """Importi in formato italiano: "12,50 kg" -> "12.50", "1.234,5" -> "1234.5"."""
    match = NUMBER_REGEX.search(raw)
    if not match:
        return None
    cleaned = match.group(0).replace(" ", "")
    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")
    elif THOUSANDS_REGEX.fullmatch(cleaned):
        cleaned = cleaned.replace(".", "")
    return cleaned


class DDTDestinatario(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ragione_sociale: Optional[str] = Field(default=None, alias="ragioneSociale")
    indirizzo: Optional[str] = None
    cap: Optional[str] = None
    citta: Optional[str] = None
    provincia: Optional[str] = None

    @field_validator(
        "ragione_sociale", "indirizzo", "cap", "citta", "provincia", mode="before"
    )
    @classmethod
    def strings(cls, value):
        return _clean_str(value)

    @field_validator("cap")
    @classmethod
    def cap_digits(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        digits = re.sub(r"\D", "", value)
        return digits or None

    @field_validator("provincia")
    @classmethod
    def provincia_upper(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        # "Milano (MI)" -> "MI": vale l'ultima sigla isolata di due lettere
        tokens = PROVINCIA_REGEX.findall(value)
        if tokens:
            return tokens[-1].upper()
        letters = re.sub(r"[^A-Za-z]", "", value).upper()
        return letters if len(letters) == 2 else None


class DDTData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    committente: Optional[str] = None
    destinatario: Optional[DDTDestinatario] = None
    data_ddt: Optional[str] = Field(default=None, alias="dataDDT")
    numero_ddt: Optional[str] = Field(default=None, alias="numeroDDT")
    colli: Optional[int] = None
    peso: Optional[float] = None
    contrassegno: Optional[float] = None

    @field_validator("committente", "numero_ddt", mode="before")
    @classmethod
    def strings(cls, value):
        return _clean_str(value)

    @field_validator("data_ddt", mode="before")
    @classmethod
    def normalize_date(cls, value) -> Optional[str]:
        value = _clean_str(value)
        if value is None:
            return None
        if isinstance(value, date):
            return value.isoformat()
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt).date().isoformat()
            except ValueError:
                continue
        # Data non interpretabile: meglio assente che inventata
        return None

    @field_validator("colli", "peso", "contrassegno", mode="before")
    @classmethod
    def numbers(cls, value):
        if isinstance(value, str):
            return _parse_number(value)
        return value

    def to_fields(self) -> Dict[str, Any]:
        """Dizionario con i soli campi presenti, nomi come sul filo."""
        fields = self.model_dump(by_alias=True, exclude_none=True)
        if not fields.get("destinatario"):
            fields.pop("destinatario", None)
        return fields
