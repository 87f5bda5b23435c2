"""
Modello Mezzo (tabella: mezzi).
"""

from datetime import datetime

from app.extensions import db


class Mezzo(db.Model):
    __tablename__ = "mezzi"

    id = db.Column(db.Integer, primary_key=True)

    targa = db.Column(db.String(16), nullable=False, unique=True, index=True)
    modello = db.Column(db.String(128), nullable=False)
    portata_kg = db.Column(db.Integer, nullable=False)
    note = db.Column(db.Text, nullable=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Mezzo id={self.id} targa={self.targa!r}>"
