"""
Schemi pydantic per la validazione dei payload JSON delle anagrafiche
e delle spedizioni.

I nomi dei campi sul filo sono quelli storici del frontend (camelCase),
esposti come alias; lato Python si usano i nomi snake_case dei modelli.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

StatoSpedizione = Literal["INSERITA", "ASSEGNATA", "IN_CONSEGNA", "CONSEGNATA", "PROBLEMA"]
Turno = Literal["MATTINO", "POMERIGGIO"]


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _decimal_comma(value):
    # Gli importi arrivano spesso in formato italiano ("12,50")
    if isinstance(value, str):
        return value.strip().replace(",", ".")
    return value


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def apply_to(self, entity) -> None:
        """Copia i campi validati sugli attributi omonimi del modello."""
        for name, value in self.model_dump().items():
            setattr(entity, name, value)


class CommittentePayload(_Payload):
    nome: NonEmptyStr
    tipo: Optional[str] = None
    note: Optional[str] = None

    @field_validator("tipo", "note", mode="before")
    @classmethod
    def clean_optional(cls, value):
        return _blank_to_none(value)


class DestinatarioPayload(_Payload):
    ragione_sociale: NonEmptyStr = Field(alias="ragioneSociale")
    indirizzo: NonEmptyStr
    cap: str = Field(pattern=r"^\d{5}$")
    citta: NonEmptyStr
    provincia: str = Field(pattern=r"^[A-Z]{2}$")
    zona: Optional[str] = None
    note: Optional[str] = None

    @field_validator("zona", "note", mode="before")
    @classmethod
    def clean_optional(cls, value):
        return _blank_to_none(value)

    @field_validator("cap", mode="before")
    @classmethod
    def strip_cap(cls, value):
        return str(value).strip() if value is not None else value

    @field_validator("provincia", mode="before")
    @classmethod
    def upper_provincia(cls, value):
        return str(value).strip().upper() if value is not None else value


class AutistaPayload(_Payload):
    nome: NonEmptyStr
    cognome: NonEmptyStr
    telefono: NonEmptyStr
    zona_principale: NonEmptyStr = Field(alias="zonaPrincipale")
    attivo: bool = True


class MezzoPayload(_Payload):
    targa: NonEmptyStr
    modello: NonEmptyStr
    portata_kg: int = Field(alias="portataKg", gt=0)
    note: Optional[str] = None

    @field_validator("note", mode="before")
    @classmethod
    def clean_optional(cls, value):
        return _blank_to_none(value)

    @field_validator("targa")
    @classmethod
    def upper_targa(cls, value: str) -> str:
        return value.replace(" ", "").upper()


class GiroPayload(_Payload):
    data: date
    turno: Turno
    autista_id: int = Field(alias="autistaId")
    mezzo_id: int = Field(alias="mezzoId")
    zona: Optional[str] = None
    note: Optional[str] = None

    @field_validator("zona", "note", mode="before")
    @classmethod
    def clean_optional(cls, value):
        return _blank_to_none(value)


class SpedizionePayload(_Payload):
    """
    Contratto di creazione spedizione.

    Il numero spedizione non fa parte del payload: se il chiamante lo invia
    viene ignorato e assegnato lato server.
    """

    committente_id: int = Field(alias="committenteId")
    destinatario_id: int = Field(alias="destinatarioId")
    data_ddt: date = Field(alias="dataDDT")
    numero_ddt: NonEmptyStr = Field(alias="numeroDDT")
    colli: int = Field(ge=1)
    peso_kg: Decimal = Field(alias="pesoKg", ge=0)
    contrassegno: Optional[Decimal] = Field(default=None, ge=0)
    note: Optional[str] = None
    stato: StatoSpedizione = "INSERITA"
    giro_id: Optional[int] = Field(default=None, alias="giroId")

    @field_validator("note", "contrassegno", mode="before")
    @classmethod
    def clean_optional(cls, value):
        return _blank_to_none(value)

    @field_validator("peso_kg", "contrassegno", mode="before")
    @classmethod
    def decimals(cls, value):
        return _decimal_comma(value)


class StatoPayload(_Payload):
    stato: StatoSpedizione


class AssignPayload(_Payload):
    giro_id: Optional[int] = Field(default=None, alias="giroId")
