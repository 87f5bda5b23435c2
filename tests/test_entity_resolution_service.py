"""
Test della risoluzione committente/destinatario.
"""

from app.extensions import db
from app.models import Destinatario
from app.services.entity_resolution_service import (
    AUTO_CREATED_NOTE,
    KnownCommittente,
    KnownDestinatario,
    resolve_committente,
    resolve_or_create_destinatario,
)


class _Creator:
    """Sostituisce la creazione su DB registrando i payload ricevuti."""

    def __init__(self, start_id=100):
        self.payloads = []
        self.next_id = start_id

    def __call__(self, payload):
        self.payloads.append(payload)
        self.next_id += 1
        return self.next_id


class TestResolveCommittente:
    known = [KnownCommittente(1, "Acme Logistica"), KnownCommittente(2, "Cati")]

    def test_exact_match_ignores_case_and_spaces(self):
        assert resolve_committente("  CATI ", self.known) == 2

    def test_substring_match_handles_legal_suffix(self):
        assert resolve_committente("Cati S.p.A.", self.known) == 2

    def test_substring_match_in_other_direction(self):
        assert resolve_committente("Acme", self.known) == 1

    def test_exact_match_wins_over_earlier_substring(self):
        known = [KnownCommittente(1, "Cati Nord"), KnownCommittente(2, "Cati")]
        assert resolve_committente("cati", known) == 2

    def test_no_match(self):
        assert resolve_committente("Beta Srl", self.known) is None

    def test_missing_name(self):
        assert resolve_committente(None, self.known) is None
        assert resolve_committente("   ", self.known) is None


class TestResolveOrCreateDestinatario:
    known = [KnownDestinatario(7, "Delta Store", "Bergamo")]

    def test_case_insensitive_match_on_name_and_city(self):
        create = _Creator()
        resolution, known = resolve_or_create_destinatario(
            {"ragioneSociale": "DELTA STORE ", "citta": " bergamo"}, self.known, create=create
        )

        assert resolution.id == 7
        assert resolution.created is False
        assert resolution.error is None
        assert create.payloads == []
        assert known == self.known

    def test_same_name_different_city_creates_new(self):
        create = _Creator()
        resolution, known = resolve_or_create_destinatario(
            {"ragioneSociale": "Delta Store", "citta": "Milano"}, self.known, create=create
        )

        assert resolution.created is True
        assert resolution.id == 101
        assert len(known) == 2
        assert known[-1] == KnownDestinatario(101, "Delta Store", "Milano")

    def test_missing_city_skips_resolution(self):
        create = _Creator()
        resolution, known = resolve_or_create_destinatario(
            {"ragioneSociale": "Delta Store"}, self.known, create=create
        )

        assert resolution.id is None
        assert resolution.error is None
        assert create.payloads == []

    def test_absent_recipient(self):
        resolution, _ = resolve_or_create_destinatario(None, self.known, create=_Creator())
        assert resolution.id is None

    def test_placeholders_for_missing_address(self):
        create = _Creator()
        resolve_or_create_destinatario(
            {"ragioneSociale": "Nuovo Cliente", "citta": "Como"}, [], create=create
        )

        payload = create.payloads[0]
        assert payload.indirizzo == "Da verificare"
        assert payload.cap == "00000"
        assert payload.provincia == "XX"
        assert payload.zona == "Da verificare"
        assert payload.note == AUTO_CREATED_NOTE

    def test_extracted_values_are_kept(self):
        create = _Creator()
        resolve_or_create_destinatario(
            {"ragioneSociale": "Nuovo", "citta": "Como", "cap": "22100", "provincia": "CO", "indirizzo": "Via Milano 3"},
            [],
            create=create,
        )

        payload = create.payloads[0]
        assert (payload.indirizzo, payload.cap, payload.provincia) == ("Via Milano 3", "22100", "CO")

    def test_accumulator_prevents_duplicates_in_same_batch(self):
        create = _Creator()
        first, known = resolve_or_create_destinatario(
            {"ragioneSociale": "Gamma", "citta": "Lecco"}, [], create=create
        )
        second, known = resolve_or_create_destinatario(
            {"ragioneSociale": "GAMMA", "citta": "lecco"}, known, create=create
        )

        assert len(create.payloads) == 1
        assert first.created is True
        assert second.created is False
        assert second.id == first.id

    def test_invalid_extracted_data_reported_as_error(self):
        create = _Creator()
        resolution, known = resolve_or_create_destinatario(
            {"ragioneSociale": "Gamma", "citta": "Lecco", "cap": "241"}, [], create=create
        )

        assert resolution.id is None
        assert resolution.created is False
        assert "cap" in resolution.error
        assert create.payloads == []
        assert known == []


def test_auto_created_recipient_persisted(app):
    resolution, known = resolve_or_create_destinatario(
        {"ragioneSociale": "Omega Srl", "citta": "Brescia"}, []
    )

    destinatario = db.session.get(Destinatario, resolution.id)
    assert resolution.created is True
    assert destinatario.cap == "00000"
    assert destinatario.provincia == "XX"
    assert destinatario.note == AUTO_CREATED_NOTE
    assert known[0].id == destinatario.id
