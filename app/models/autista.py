"""
Modello Autista (tabella: autisti).
"""

from datetime import datetime

from app.extensions import db


class Autista(db.Model):
    __tablename__ = "autisti"

    id = db.Column(db.Integer, primary_key=True)

    nome = db.Column(db.String(128), nullable=False)
    cognome = db.Column(db.String(128), nullable=False, index=True)
    telefono = db.Column(db.String(64), nullable=False)
    zona_principale = db.Column(db.String(64), nullable=False)

    attivo = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Autista id={self.id} {self.cognome} {self.nome}>"
