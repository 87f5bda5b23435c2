"""
Modello Committente (tabella: committenti).

Il committente è chi affida la spedizione al vettore.
Durante l'import DDT viene solo cercato per nome, mai creato.
"""

from datetime import datetime

from app.extensions import db


class Committente(db.Model):
    __tablename__ = "committenti"

    id = db.Column(db.Integer, primary_key=True)

    nome = db.Column(db.String(255), nullable=False, index=True)
    # Etichetta libera di categoria (es. "GDO", "Ricambi")
    tipo = db.Column(db.String(64), nullable=True)
    note = db.Column(db.Text, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Committente id={self.id} nome={self.nome!r}>"
