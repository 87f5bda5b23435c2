"""
Modello Spedizione (tabella: spedizioni).

Il numero spedizione è progressivo e assegnato solo al momento
dell'inserimento (mai fornito dal chiamante, mai riutilizzato).
"""

from datetime import datetime

from app.extensions import db


# Ciclo di vita: INSERITA -> ASSEGNATA -> IN_CONSEGNA -> CONSEGNATA (oppure PROBLEMA)
STATI_SPEDIZIONE = ("INSERITA", "ASSEGNATA", "IN_CONSEGNA", "CONSEGNATA", "PROBLEMA")


class Spedizione(db.Model):
    __tablename__ = "spedizioni"
    __table_args__ = (
        db.UniqueConstraint(
            "committente_id", "numero_ddt", name="uq_spedizioni_committente_ddt"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    numero_spedizione = db.Column(db.Integer, nullable=False, unique=True, index=True)

    committente_id = db.Column(
        db.Integer,
        db.ForeignKey("committenti.id"),
        nullable=False,
        index=True,
    )
    destinatario_id = db.Column(
        db.Integer,
        db.ForeignKey("destinatari.id"),
        nullable=False,
        index=True,
    )

    # Dati DDT
    data_ddt = db.Column(db.Date, nullable=False, index=True)
    numero_ddt = db.Column(db.String(64), nullable=False, index=True)
    colli = db.Column(db.Integer, nullable=False)
    peso_kg = db.Column(db.Numeric(10, 2), nullable=False)
    contrassegno = db.Column(db.Numeric(10, 2), nullable=True)

    stato = db.Column(db.String(16), nullable=False, default="INSERITA", index=True)

    giro_id = db.Column(
        db.Integer,
        db.ForeignKey("giri.id"),
        nullable=True,
        index=True,
    )

    note = db.Column(db.Text, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    committente = db.relationship("Committente", backref="spedizioni")
    destinatario = db.relationship("Destinatario", backref="spedizioni")
    giro = db.relationship("Giro", back_populates="spedizioni")

    def __repr__(self) -> str:
        return (
            f"<Spedizione id={self.id} numero={self.numero_spedizione} "
            f"ddt={self.numero_ddt!r} stato={self.stato!r}>"
        )
