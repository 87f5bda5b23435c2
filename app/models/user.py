"""
Modello User (tabella: users).

Rappresenta l'utente d'ufficio che accede al gestionale.
L'autenticazione è un semplice confronto delle credenziali salvate.
"""

from datetime import datetime

from app.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(64), nullable=False, unique=True, index=True)
    password = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(128), nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
