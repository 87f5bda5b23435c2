"""
Test di spedizioni, giri e contatori dashboard via API.
"""

from datetime import date

from app.extensions import db
from app.models import Spedizione


def _payload(response):
    return response.get_json()["payload"]


def _spedizione_body(committente_id, destinatario_id, numero_ddt="1001", **overrides):
    body = {
        "committenteId": committente_id,
        "destinatarioId": destinatario_id,
        "dataDDT": "2024-03-05",
        "numeroDDT": numero_ddt,
        "colli": 3,
        "pesoKg": "12,50",
        "contrassegno": None,
        "note": "Importato da DDT - pagina 1",
        "stato": "INSERITA",
        "giroId": None,
    }
    body.update(overrides)
    return body


class TestCreateSpedizione:
    def test_numbers_assigned_in_creation_order(self, client, make_committente, make_destinatario):
        committente = make_committente()
        destinatario = make_destinatario()

        first = client.post("/api/spedizioni/", json=_spedizione_body(committente.id, destinatario.id, "A1"))
        second = client.post(
            "/api/spedizioni/",
            json=_spedizione_body(committente.id, destinatario.id, "A2", numeroSpedizione=999),
        )

        assert first.status_code == 201
        assert second.status_code == 201
        assert _payload(first)["numeroSpedizione"] == 1
        assert _payload(second)["numeroSpedizione"] == 2
        assert _payload(first)["pesoKg"] == 12.5

    def test_numbering_continues_after_highest(self, client, make_committente, make_destinatario, make_spedizione):
        committente = make_committente()
        destinatario = make_destinatario()
        make_spedizione(committente, destinatario, 57)

        response = client.post("/api/spedizioni/", json=_spedizione_body(committente.id, destinatario.id))

        assert _payload(response)["numeroSpedizione"] == 58

    def test_unknown_references_rejected(self, client, make_committente):
        committente = make_committente()

        response = client.post("/api/spedizioni/", json=_spedizione_body(committente.id, 999))

        assert response.status_code == 400
        assert response.get_json()["message"] == "Destinatario non valido"
        assert Spedizione.query.count() == 0

    def test_duplicate_document_number_conflicts(self, client, make_committente, make_destinatario):
        committente = make_committente()
        destinatario = make_destinatario()
        body = _spedizione_body(committente.id, destinatario.id, "DUP")

        assert client.post("/api/spedizioni/", json=body).status_code == 201
        assert client.post("/api/spedizioni/", json=body).status_code == 409
        assert Spedizione.query.count() == 1

    def test_missing_fields(self, client):
        response = client.post("/api/spedizioni/", json={"numeroDDT": "X"})

        assert response.status_code == 400
        errors = _payload(response)["errors"]
        assert "committenteId" in errors
        assert "colli" in errors


class TestPlanning:
    def test_assign_and_unassign(self, client, make_committente, make_destinatario, make_spedizione, make_giro):
        spedizione = make_spedizione(make_committente(), make_destinatario(), 1)
        giro = make_giro()
        spedizione_id, giro_id = spedizione.id, giro.id

        response = client.put(f"/api/spedizioni/{spedizione_id}/assign", json={"giroId": giro_id})
        assert _payload(response)["stato"] == "ASSEGNATA"
        assert _payload(response)["giroId"] == giro_id

        response = client.put(f"/api/spedizioni/{spedizione_id}/assign", json={"giroId": None})
        assert _payload(response)["stato"] == "INSERITA"
        assert _payload(response)["giroId"] is None

    def test_assign_to_unknown_giro(self, client, make_committente, make_destinatario, make_spedizione):
        spedizione = make_spedizione(make_committente(), make_destinatario(), 1)

        response = client.put(f"/api/spedizioni/{spedizione.id}/assign", json={"giroId": 999})

        assert response.status_code == 400

    def test_update_stato(self, client, make_committente, make_destinatario, make_spedizione):
        spedizione = make_spedizione(make_committente(), make_destinatario(), 1)

        response = client.patch(f"/api/spedizioni/{spedizione.id}/stato", json={"stato": "IN_CONSEGNA"})
        assert _payload(response)["stato"] == "IN_CONSEGNA"

        response = client.patch(f"/api/spedizioni/{spedizione.id}/stato", json={"stato": "PERSA"})
        assert response.status_code == 400

    def test_delete_giro_resets_shipments(self, client, make_committente, make_destinatario, make_spedizione, make_giro):
        giro = make_giro()
        committente, destinatario = make_committente(), make_destinatario()
        ids = [
            make_spedizione(committente, destinatario, n, stato="ASSEGNATA", giro_id=giro.id).id
            for n in (1, 2)
        ]

        assert client.delete(f"/api/giri/{giro.id}").status_code == 200

        db.session.expire_all()
        for spedizione_id in ids:
            spedizione = db.session.get(Spedizione, spedizione_id)
            assert spedizione.giro_id is None
            assert spedizione.stato == "INSERITA"

    def test_giro_detail_and_by_date(self, client, make_committente, make_destinatario, make_spedizione, make_giro):
        giro = make_giro(data=date(2024, 3, 5))
        make_spedizione(make_committente(), make_destinatario(), 3, stato="ASSEGNATA", giro_id=giro.id)

        response = client.get(f"/api/giri/{giro.id}")
        detail = _payload(response)
        assert detail["autista"]["cognome"] == "Rossi"
        assert detail["mezzo"]["targa"] == "AB123CD"
        assert [s["numeroSpedizione"] for s in detail["spedizioni"]] == [3]

        assert len(_payload(client.get("/api/giri/by-date/2024-03-05"))) == 1
        assert _payload(client.get("/api/giri/by-date/2024-03-06")) == []
        assert client.get("/api/giri/by-date/05-03-2024").status_code == 400

    def test_create_giro_with_unknown_driver(self, client):
        response = client.post(
            "/api/giri/",
            json={"data": "2024-03-05", "turno": "MATTINO", "autistaId": 1, "mezzoId": 1},
        )

        assert response.status_code == 400


def test_stats(client, make_committente, make_destinatario, make_spedizione, make_giro):
    committente, destinatario = make_committente(), make_destinatario()
    oggi = make_giro()
    ieri = make_giro(data=date(2000, 1, 1), targa="ZZ999ZZ")
    make_spedizione(committente, destinatario, 1)
    make_spedizione(committente, destinatario, 2)
    make_spedizione(committente, destinatario, 3, stato="IN_CONSEGNA", giro_id=oggi.id)
    make_spedizione(committente, destinatario, 4, stato="CONSEGNATA", giro_id=oggi.id)
    make_spedizione(committente, destinatario, 5, stato="CONSEGNATA", giro_id=ieri.id)

    stats = _payload(client.get("/api/stats/"))

    assert stats == {
        "spedizioniDaAssegnare": 2,
        "giriOggi": 1,
        "inConsegna": 1,
        "consegnateOggi": 1,
    }
