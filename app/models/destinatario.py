"""
Modello Destinatario (tabella: destinatari).

Rappresenta l'azienda presso cui avviene la consegna.
Può essere creato in automatico dall'import DDT con valori segnaposto
("Da verificare", "00000", "XX") e una nota che ne segnala la verifica.
"""

from datetime import datetime

from app.extensions import db


class Destinatario(db.Model):
    __tablename__ = "destinatari"

    id = db.Column(db.Integer, primary_key=True)

    ragione_sociale = db.Column(db.String(255), nullable=False, index=True)

    # Indirizzo
    indirizzo = db.Column(db.String(255), nullable=False)
    cap = db.Column(db.String(5), nullable=False)
    citta = db.Column(db.String(128), nullable=False, index=True)
    provincia = db.Column(db.String(2), nullable=False)

    # Zona di consegna usata in pianificazione
    zona = db.Column(db.String(64), nullable=True)
    note = db.Column(db.Text, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<Destinatario id={self.id} ragione_sociale={self.ragione_sociale!r} "
            f"citta={self.citta!r}>"
        )
