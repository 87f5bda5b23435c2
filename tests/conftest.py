"""
Fixture condivise: app Flask con SQLite in memoria e helper per
creare le anagrafiche di base.
"""

from datetime import date
from decimal import Decimal

import pytest

from app import create_app
from app.extensions import db
from app.models import Autista, Committente, Destinatario, Giro, Mezzo, Spedizione
from config import TestConfig


@pytest.fixture
def app(tmp_path):
    class _TestConfig(TestConfig):
        LOG_DIR = str(tmp_path / "logs")

    app = create_app(_TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_committente(app):
    def _make(nome="Cati", tipo=None):
        committente = Committente(nome=nome, tipo=tipo)
        db.session.add(committente)
        db.session.commit()
        return committente

    return _make


@pytest.fixture
def make_destinatario(app):
    def _make(ragione_sociale="Delta Store", citta="Bergamo", **kwargs):
        destinatario = Destinatario(
            ragione_sociale=ragione_sociale,
            citta=citta,
            indirizzo=kwargs.get("indirizzo", "Via Roma 1"),
            cap=kwargs.get("cap", "24100"),
            provincia=kwargs.get("provincia", "BG"),
            zona=kwargs.get("zona"),
        )
        db.session.add(destinatario)
        db.session.commit()
        return destinatario

    return _make


@pytest.fixture
def make_giro(app):
    def _make(data=None, targa="AB123CD"):
        autista = Autista(nome="Mario", cognome="Rossi", telefono="3331234567", zona_principale="Bergamo")
        mezzo = Mezzo(targa=targa, modello="Daily", portata_kg=3500)
        db.session.add_all([autista, mezzo])
        db.session.flush()
        giro = Giro(data=data or date.today(), turno="MATTINO", autista_id=autista.id, mezzo_id=mezzo.id)
        db.session.add(giro)
        db.session.commit()
        return giro

    return _make


@pytest.fixture
def make_spedizione(app):
    def _make(committente, destinatario, numero, **kwargs):
        spedizione = Spedizione(
            numero_spedizione=numero,
            committente_id=committente.id,
            destinatario_id=destinatario.id,
            data_ddt=kwargs.get("data_ddt", date(2024, 3, 5)),
            numero_ddt=kwargs.get("numero_ddt", f"DDT-{numero}"),
            colli=kwargs.get("colli", 1),
            peso_kg=kwargs.get("peso_kg", Decimal("10.00")),
            stato=kwargs.get("stato", "INSERITA"),
            giro_id=kwargs.get("giro_id"),
        )
        db.session.add(spedizione)
        db.session.commit()
        return spedizione

    return _make
