"""
Serializzazione dei modelli verso JSON, con i nomi campo camelCase
attesi dal frontend.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional


def _decimal(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def committente_to_dict(c) -> Dict[str, Any]:
    return {
        "id": c.id,
        "nome": c.nome,
        "tipo": c.tipo,
        "note": c.note,
        "createdAt": _iso(c.created_at),
    }


def destinatario_to_dict(d) -> Dict[str, Any]:
    return {
        "id": d.id,
        "ragioneSociale": d.ragione_sociale,
        "indirizzo": d.indirizzo,
        "cap": d.cap,
        "citta": d.citta,
        "provincia": d.provincia,
        "zona": d.zona,
        "note": d.note,
        "createdAt": _iso(d.created_at),
    }


def autista_to_dict(a) -> Dict[str, Any]:
    return {
        "id": a.id,
        "nome": a.nome,
        "cognome": a.cognome,
        "telefono": a.telefono,
        "zonaPrincipale": a.zona_principale,
        "attivo": a.attivo,
        "createdAt": _iso(a.created_at),
    }


def mezzo_to_dict(m) -> Dict[str, Any]:
    return {
        "id": m.id,
        "targa": m.targa,
        "modello": m.modello,
        "portataKg": m.portata_kg,
        "note": m.note,
        "createdAt": _iso(m.created_at),
    }


def spedizione_to_dict(s, with_relations: bool = True) -> Dict[str, Any]:
    payload = {
        "id": s.id,
        "numeroSpedizione": s.numero_spedizione,
        "committenteId": s.committente_id,
        "destinatarioId": s.destinatario_id,
        "dataDDT": _iso(s.data_ddt),
        "numeroDDT": s.numero_ddt,
        "colli": s.colli,
        "pesoKg": _decimal(s.peso_kg),
        "contrassegno": _decimal(s.contrassegno),
        "stato": s.stato,
        "giroId": s.giro_id,
        "note": s.note,
        "createdAt": _iso(s.created_at),
    }
    if with_relations:
        payload["committente"] = committente_to_dict(s.committente) if s.committente else None
        payload["destinatario"] = destinatario_to_dict(s.destinatario) if s.destinatario else None
    return payload


def giro_to_dict(g, with_spedizioni: bool = False) -> Dict[str, Any]:
    payload = {
        "id": g.id,
        "data": _iso(g.data),
        "turno": g.turno,
        "autistaId": g.autista_id,
        "mezzoId": g.mezzo_id,
        "zona": g.zona,
        "note": g.note,
        "autista": autista_to_dict(g.autista) if g.autista else None,
        "mezzo": mezzo_to_dict(g.mezzo) if g.mezzo else None,
    }
    if with_spedizioni:
        payload["spedizioni"] = [spedizione_to_dict(s) for s in g.spedizioni]
    return payload


def validation_errors(exc) -> Dict[str, str]:
    """Errori pydantic come {campo: messaggio}, con gli alias usati sul filo."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        errors.setdefault(field, err.get("msg", "non valido"))
    return errors
