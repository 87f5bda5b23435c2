"""
Modello Giro (tabella: giri).

Un giro raggruppa le spedizioni consegnate da un autista con un mezzo
in un turno di una giornata.
"""

from datetime import datetime

from app.extensions import db


TURNI = ("MATTINO", "POMERIGGIO")


class Giro(db.Model):
    __tablename__ = "giri"

    id = db.Column(db.Integer, primary_key=True)

    data = db.Column(db.Date, nullable=False, index=True)
    # Valori: 'MATTINO', 'POMERIGGIO'
    turno = db.Column(db.String(16), nullable=False)

    autista_id = db.Column(
        db.Integer,
        db.ForeignKey("autisti.id"),
        nullable=False,
        index=True,
    )
    mezzo_id = db.Column(
        db.Integer,
        db.ForeignKey("mezzi.id"),
        nullable=False,
        index=True,
    )

    zona = db.Column(db.String(64), nullable=True)
    note = db.Column(db.Text, nullable=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    # Relationships
    autista = db.relationship("Autista", backref="giri")
    mezzo = db.relationship("Mezzo", backref="giri")
    spedizioni = db.relationship(
        "Spedizione",
        back_populates="giro",
        order_by="Spedizione.numero_spedizione",
    )

    def __repr__(self) -> str:
        return f"<Giro id={self.id} data={self.data} turno={self.turno!r}>"
